"""Protocol for Topic repository."""

from typing import Protocol

from learnloop.domain.common.value_objects.ids import TopicId, UserId
from learnloop.domain.learning.entities.topic import Topic


class TopicRepositoryProtocol(Protocol):
    """Protocol for Topic persistence."""

    def add(self, topic: Topic) -> Topic:
        """Insert a topic and return it with database-generated values."""
        ...

    def find_by_id(self, topic_id: TopicId, user_id: UserId) -> Topic | None:
        """
        Find a topic by ID with user ownership check.

        Returns:
            Topic entity if found and owned by user, None otherwise
        """
        ...

    def find_by_user(self, user_id: UserId) -> list[Topic]:
        """Get a user's topics ordered by created_at DESC."""
        ...
