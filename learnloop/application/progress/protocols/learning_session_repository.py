"""Protocol for LearningSession repository."""

from typing import Protocol

from learnloop.domain.common.value_objects.ids import LearningSessionId, UserId
from learnloop.domain.progress.entities.learning_session import LearningSession


class LearningSessionRepositoryProtocol(Protocol):
    """Protocol for the append-only learning session audit trail."""

    def add(self, session: LearningSession) -> LearningSession:
        """Insert a session and return it with its database-generated id."""
        ...

    def mark_xp_applied(self, session_id: LearningSessionId) -> None:
        """Write the reconciliation marker for a session whose XP was applied."""
        ...

    def find_by_user(
        self, user_id: UserId, limit: int
    ) -> list[tuple[LearningSession, bool]]:
        """
        Get a user's most recent sessions.

        Returns:
            (session, xp_applied) pairs ordered by created_at DESC
        """
        ...

    def find_unapplied(self, user_id: UserId) -> list[LearningSession]:
        """Sessions with xp_gained > 0 and no reconciliation marker."""
        ...
