"""Mappers for progress ORM ↔ Domain conversion."""

from learnloop.domain.common.value_objects.ids import (
    AchievementId,
    LearningSessionId,
    TopicId,
    UserId,
)
from learnloop.domain.progress.entities.achievement import Achievement
from learnloop.domain.progress.entities.learning_session import ActivityType, LearningSession
from learnloop.models import Achievement as AchievementORM
from learnloop.models import LearningSession as LearningSessionORM


class LearningSessionMapper:
    """Mapper for LearningSession ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: LearningSessionORM) -> LearningSession:
        """Convert ORM model to domain entity."""
        return LearningSession.create_with_id(
            id=LearningSessionId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            topic_id=TopicId(orm_model.topic_id) if orm_model.topic_id else None,
            activity_type=ActivityType(orm_model.activity_type),
            xp_gained=orm_model.xp_gained,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: LearningSession) -> LearningSessionORM:
        """Convert a new domain entity to an ORM model. Sessions are never updated."""
        return LearningSessionORM(
            user_id=domain_entity.user_id.value,
            topic_id=domain_entity.topic_id.value if domain_entity.topic_id else None,
            activity_type=domain_entity.activity_type.value,
            xp_gained=domain_entity.xp_gained,
        )


class AchievementMapper:
    """Mapper for Achievement ORM → Domain conversion."""

    def to_domain(self, orm_model: AchievementORM) -> Achievement:
        """Convert ORM model to domain entity."""
        return Achievement.create_with_id(
            id=AchievementId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            criteria=orm_model.criteria,
            title=orm_model.title,
            unlocked_at=orm_model.unlocked_at,
        )
