"""Repository for the learning session audit trail."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from learnloop.domain.common.value_objects.ids import LearningSessionId, UserId
from learnloop.domain.progress.entities.learning_session import LearningSession
from learnloop.infrastructure.progress.mappers.learning_session_mapper import (
    LearningSessionMapper,
)
from learnloop.models import LearningSession as LearningSessionORM
from learnloop.models import LearningSessionXp as LearningSessionXpORM


class LearningSessionRepository:
    """Append-only repository for LearningSession entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = LearningSessionMapper()

    def add(self, session: LearningSession) -> LearningSession:
        """
        Insert a session.

        Args:
            session: New session entity (id 0)

        Returns:
            Session with database-generated id and timestamp
        """
        orm_model = self.mapper.to_orm(session)
        self.db.add(orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def mark_xp_applied(self, session_id: LearningSessionId) -> None:
        """Write the reconciliation marker; must share the XP increment's transaction."""
        self.db.add(LearningSessionXpORM(session_id=session_id.value))
        self.db.flush()

    def find_by_user(self, user_id: UserId, limit: int) -> list[tuple[LearningSession, bool]]:
        """
        Get a user's most recent sessions with their XP attribution flag.

        Args:
            user_id: The user ID
            limit: Maximum number of sessions

        Returns:
            (session, xp_applied) pairs ordered by created_at DESC
        """
        stmt = (
            select(LearningSessionORM, LearningSessionXpORM.session_id.is_not(None))
            .outerjoin(
                LearningSessionXpORM,
                LearningSessionXpORM.session_id == LearningSessionORM.id,
            )
            .where(LearningSessionORM.user_id == user_id.value)
            .order_by(LearningSessionORM.created_at.desc(), LearningSessionORM.id.desc())
            .limit(limit)
        )
        return [(self.mapper.to_domain(orm), bool(applied)) for orm, applied in self.db.execute(stmt)]

    def find_unapplied(self, user_id: UserId) -> list[LearningSession]:
        """
        Sessions that granted XP but have no reconciliation marker.

        Args:
            user_id: The user ID

        Returns:
            Sessions ordered by created_at ASC
        """
        stmt = (
            select(LearningSessionORM)
            .outerjoin(
                LearningSessionXpORM,
                LearningSessionXpORM.session_id == LearningSessionORM.id,
            )
            .where(
                LearningSessionORM.user_id == user_id.value,
                LearningSessionORM.xp_gained > 0,
                LearningSessionXpORM.session_id.is_(None),
            )
            .order_by(LearningSessionORM.created_at.asc(), LearningSessionORM.id.asc())
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars()]
