"""Identity bounded context - users and their progress counters."""

from .entities.user import User

__all__ = ["User"]
