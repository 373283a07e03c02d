"""
LearningSession entity, the immutable audit record of one XP-granting activity.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.exceptions import ValidationError
from learnloop.domain.common.value_objects import LearningSessionId, TopicId, UserId


class ActivityType(StrEnum):
    """Kinds of learning activity that can grant XP."""

    STUDY = "study"
    QUIZ = "quiz"
    FLASHCARDS = "flashcards"
    INTERVIEW = "interview"
    CHAT = "chat"


@dataclass(frozen=True)
class LearningSession(Entity[LearningSessionId]):
    """
    Append-only record of a learning activity.

    Business Rules:
    - XP gained is a non-negative integer
    - Never mutated after creation (frozen)
    - The unit of XP attribution: a session whose XP was applied has a
      reconciliation marker written in the same transaction as the increment
    """

    id: LearningSessionId
    user_id: UserId
    topic_id: TopicId | None
    activity_type: ActivityType
    xp_gained: int
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if isinstance(self.xp_gained, bool) or not isinstance(self.xp_gained, int):
            raise ValidationError("XP gained must be an integer", field="xp_gained")
        if self.xp_gained < 0:
            raise ValidationError(
                "XP gained cannot be negative", field="xp_gained", value=self.xp_gained
            )

    @classmethod
    def create(
        cls,
        user_id: UserId,
        topic_id: TopicId | None,
        activity_type: ActivityType,
        xp_gained: int,
    ) -> "LearningSession":
        """Create a new session (ID will be 0 until persisted)."""
        return cls(
            id=LearningSessionId.generate(),
            user_id=user_id,
            topic_id=topic_id,
            activity_type=activity_type,
            xp_gained=xp_gained,
        )

    @classmethod
    def create_with_id(
        cls,
        id: LearningSessionId,
        user_id: UserId,
        topic_id: TopicId | None,
        activity_type: ActivityType,
        xp_gained: int,
        created_at: datetime,
    ) -> "LearningSession":
        """Reconstitute a session from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            topic_id=topic_id,
            activity_type=activity_type,
            xp_gained=xp_gained,
            created_at=created_at,
        )
