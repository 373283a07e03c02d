"""Use case for resolving the calling user."""

import structlog

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.application.identity.protocols.user_repository import UserRepositoryProtocol
from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.identity.entities.user import User
from learnloop.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class UserUseCase:
    """Use case for caller identity upsert."""

    def __init__(self, uow: UnitOfWork, user_repository: UserRepositoryProtocol) -> None:
        """Initialize use case with repository protocols."""
        self.uow = uow
        self.user_repository = user_repository

    def get_or_create(self, user_id: str, display_name: str | None = None) -> User:
        """
        Return the user, creating it with empty progress on first sight.

        Args:
            user_id: Opaque user identifier supplied by the caller
            display_name: Optional name used only when the user is created

        Raises:
            ValidationError: If the user id is empty or too long
        """
        try:
            user_id_vo = UserId(user_id)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        existing = self.user_repository.find_by_id(user_id_vo)
        if existing is not None:
            return existing

        with self.uow:
            user = self.user_repository.get_or_create(user_id_vo, display_name)
            self.uow.commit()

        logger.info("user_resolved", user_id=user_id)
        return user
