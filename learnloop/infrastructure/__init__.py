"""
Infrastructure layer.

Adapters for the application layer's protocols: SQLAlchemy repositories and
unit of work, the pydantic-ai content provider, and the FastAPI routers.
"""
