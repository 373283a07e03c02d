"""FastAPI dependencies shared by routers."""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from fastapi import HTTPException, status

from learnloop.feature_flags import get_feature_flag

F = TypeVar("F", bound=Callable[..., Any])


def require_ai_enabled(func: F) -> F:
    """
    Answer 410 Gone instead of running an AI route when no provider is configured.

    Applied below the route and rate limit decorators so a disabled server
    never reaches the content provider.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        if not get_feature_flag("ai"):
            raise HTTPException(
                status_code=status.HTTP_410_GONE,
                detail="AI features are not enabled on this server",
            )
        return await func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
