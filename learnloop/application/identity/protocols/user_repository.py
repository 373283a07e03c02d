"""Protocol for User repository."""

from datetime import date
from typing import Protocol

from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    """Protocol for User persistence and atomic progress counter updates."""

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Args:
            user_id: The user ID

        Returns:
            User entity if found, None otherwise
        """
        ...

    def get_or_create(self, user_id: UserId, display_name: str | None = None) -> User:
        """
        Return the user, inserting an empty-progress row on first sight.

        Safe under concurrent first requests for the same id.
        """
        ...

    def increment_xp(self, user_id: UserId, amount: int) -> int | None:
        """
        Atomically add ``amount`` to the user's XP in the store.

        Returns:
            The new XP total, or None if the user does not exist
        """
        ...

    def compare_and_set_streak(
        self,
        user_id: UserId,
        expected_streak: int,
        expected_date: date | None,
        new_streak: int,
        new_date: date,
    ) -> bool:
        """
        Write a new streak only if the stored streak state still matches.

        Returns:
            True if the row was updated, False if another writer got there first
        """
        ...
