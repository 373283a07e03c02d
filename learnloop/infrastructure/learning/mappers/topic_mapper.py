"""Mapper for Topic ORM ↔ Domain conversion."""

from learnloop.domain.common.value_objects.ids import TopicId, UserId
from learnloop.domain.learning.entities.topic import Topic
from learnloop.models import Topic as TopicORM


class TopicMapper:
    """Mapper for Topic ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: TopicORM) -> Topic:
        """Convert ORM model to domain entity."""
        return Topic.create_with_id(
            id=TopicId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            title=orm_model.title,
            description=orm_model.description,
            difficulty=orm_model.difficulty,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Topic) -> TopicORM:
        """Convert a new domain entity to an ORM model. Topics are immutable."""
        return TopicORM(
            user_id=domain_entity.user_id.value,
            title=domain_entity.title,
            description=domain_entity.description,
            difficulty=domain_entity.difficulty,
        )
