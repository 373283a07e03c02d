"""
Application layer.

Use cases orchestrate domain objects and repository protocols. They own
transaction boundaries through the UnitOfWork; repositories never commit.
"""
