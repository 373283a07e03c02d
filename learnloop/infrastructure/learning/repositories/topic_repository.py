"""Repository for Topic domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from learnloop.domain.common.value_objects.ids import TopicId, UserId
from learnloop.domain.learning.entities.topic import Topic
from learnloop.infrastructure.learning.mappers.topic_mapper import TopicMapper
from learnloop.models import Topic as TopicORM


class TopicRepository:
    """Repository for Topic domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = TopicMapper()

    def add(self, topic: Topic) -> Topic:
        """
        Insert a topic.

        Returns:
            Topic with database-generated id and timestamp
        """
        orm_model = self.mapper.to_orm(topic)
        self.db.add(orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def find_by_id(self, topic_id: TopicId, user_id: UserId) -> Topic | None:
        """
        Find a topic by ID with user ownership check.

        Args:
            topic_id: The topic ID
            user_id: The user ID for ownership verification

        Returns:
            Topic entity if found and owned by user, None otherwise
        """
        stmt = select(TopicORM).where(
            TopicORM.id == topic_id.value,
            TopicORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(self, user_id: UserId) -> list[Topic]:
        """
        Get all topics of a user.

        Returns:
            Topics ordered by created_at DESC
        """
        stmt = (
            select(TopicORM)
            .where(TopicORM.user_id == user_id.value)
            .order_by(TopicORM.created_at.desc(), TopicORM.id.desc())
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars()]
