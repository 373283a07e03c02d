"""FastAPI dependencies for caller identity."""

from typing import Annotated

from fastapi import Depends, Header

from learnloop.application.identity.use_cases.user_use_case import UserUseCase
from learnloop.core import container
from learnloop.domain.identity.entities.user import User
from learnloop.exceptions import UnauthenticatedError
from learnloop.infrastructure.common.di import inject_use_case


def get_current_user(
    use_case: Annotated[UserUseCase, Depends(inject_use_case(container.user_use_case))],
    x_user_id: Annotated[str | None, Header(description="Caller's user id")] = None,
    x_user_name: Annotated[str | None, Header(description="Display name used on first sight")] = None,
) -> User:
    """
    Resolve the calling user from the X-User-Id header.

    Authentication happens upstream; the user row is created on first sight.

    Raises:
        UnauthenticatedError: If the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise UnauthenticatedError
    return use_case.get_or_create(x_user_id.strip(), x_user_name)


CurrentUser = Annotated[User, Depends(get_current_user)]
