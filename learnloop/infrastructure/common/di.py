import threading
from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from learnloop.core import container
from learnloop.database import DatabaseSession

T = TypeVar("T")

# container.db is process-wide; override and resolve must not interleave across requests
_resolve_lock = threading.Lock()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Build a FastAPI dependency that resolves ``provider`` against the request session.

    Repositories and the unit of work capture the session when they are
    constructed, so the override only has to last while the graph is built.
    Sync dependencies run on threadpool workers, hence the lock.
    """

    def resolve(db: DatabaseSession) -> T:
        with _resolve_lock, container.db.override(db):
            return provider()

    return resolve
