"""Repository for User domain entities and their progress counters."""

from datetime import date

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.identity.entities.user import User
from learnloop.infrastructure.common.sql import insert_ignore
from learnloop.infrastructure.identity.mappers.user_mapper import UserMapper
from learnloop.models import User as UserORM


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Always reloads the row, since counters are changed by bulk UPDATEs
        that bypass the session's identity map.

        Args:
            user_id: The user ID

        Returns:
            User entity if found, None otherwise
        """
        stmt = (
            select(UserORM)
            .where(UserORM.id == user_id.value)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def get_or_create(self, user_id: UserId, display_name: str | None = None) -> User:
        """
        Return the user, inserting an empty-progress row on first sight.

        Args:
            user_id: The user ID
            display_name: Name stored only if the row is created here

        Returns:
            The existing or newly created user
        """
        insert_ignore(
            self.db,
            UserORM,
            {"id": user_id.value, "display_name": display_name, "xp": 0, "streak": 0},
            conflict_columns=["id"],
        )
        user = self.find_by_id(user_id)
        if user is None:
            raise RuntimeError(f"User {user_id.value} vanished after upsert")
        return user

    def increment_xp(self, user_id: UserId, amount: int) -> int | None:
        """
        Atomically add XP in a single UPDATE ... RETURNING statement.

        Args:
            user_id: The user ID
            amount: XP to add

        Returns:
            New XP total, or None if the user does not exist
        """
        stmt = (
            update(UserORM)
            .where(UserORM.id == user_id.value)
            .values(xp=UserORM.xp + amount)
            .returning(UserORM.xp)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).scalar_one_or_none()

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

        Args:
            user_id: The user ID
            expected_streak: Streak read before computing the new state
            expected_date: Last activity date read before computing the new state
            new_streak: Streak to store
            new_date: Last activity date to store

        Returns:
            True if the row was updated, False if it changed since it was read
        """
        date_matches = (
            UserORM.last_activity_date.is_(None)
            if expected_date is None
            else UserORM.last_activity_date == expected_date
        )
        stmt = (
            update(UserORM)
            .where(
                UserORM.id == user_id.value,
                UserORM.streak == expected_streak,
                date_matches,
            )
            .values(streak=new_streak, last_activity_date=new_date)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]
