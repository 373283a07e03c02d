"""Repository for Achievement domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.progress.entities.achievement import Achievement
from learnloop.infrastructure.common.sql import insert_ignore
from learnloop.infrastructure.progress.mappers.learning_session_mapper import AchievementMapper
from learnloop.models import Achievement as AchievementORM


class AchievementRepository:
    """Repository for Achievement domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = AchievementMapper()

    def unlock(self, user_id: UserId, criteria: str, title: str) -> bool:
        """
        Insert the achievement unless the user already has it.

        Returns:
            True if newly unlocked
        """
        return insert_ignore(
            self.db,
            AchievementORM,
            {"user_id": user_id.value, "criteria": criteria, "title": title},
            conflict_columns=["user_id", "criteria"],
        )

    def find_by_user(self, user_id: UserId) -> list[Achievement]:
        """Get a user's achievements ordered by unlock time."""
        stmt = (
            select(AchievementORM)
            .where(AchievementORM.user_id == user_id.value)
            .order_by(AchievementORM.unlocked_at.asc(), AchievementORM.id.asc())
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars()]
