"""Protocol for Achievement repository."""

from typing import Protocol

from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.progress.entities.achievement import Achievement


class AchievementRepositoryProtocol(Protocol):
    """Protocol for Achievement persistence."""

    def unlock(self, user_id: UserId, criteria: str, title: str) -> bool:
        """
        Insert the achievement unless the user already has it.

        Returns:
            True if newly unlocked, False if it already existed
        """
        ...

    def find_by_user(self, user_id: UserId) -> list[Achievement]:
        """Get a user's achievements ordered by unlock time."""
        ...
