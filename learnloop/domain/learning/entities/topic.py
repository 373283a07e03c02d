"""Topic entity - a subject a user is studying."""

from dataclasses import dataclass
from datetime import datetime

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.exceptions import ValidationError
from learnloop.domain.common.value_objects import TopicId, UserId

MAX_TITLE_LENGTH = 200
MAX_DIFFICULTY_LENGTH = 20


@dataclass(frozen=True)
class Topic(Entity[TopicId]):
    """
    A study topic. Immutable after creation.

    Business Rules:
    - Title cannot be empty
    - Difficulty is a short free-form label (e.g. beginner, advanced)
    """

    id: TopicId
    user_id: UserId
    title: str
    description: str | None = None
    difficulty: str = "beginner"
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Topic title cannot be empty", field="title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Topic title cannot exceed {MAX_TITLE_LENGTH} characters", field="title"
            )
        if not self.difficulty.strip() or len(self.difficulty) > MAX_DIFFICULTY_LENGTH:
            raise ValidationError(
                f"Difficulty must be 1 to {MAX_DIFFICULTY_LENGTH} characters",
                field="difficulty",
                value=self.difficulty,
            )

    @classmethod
    def create(
        cls,
        user_id: UserId,
        title: str,
        description: str | None = None,
        difficulty: str = "beginner",
    ) -> "Topic":
        """Create a new topic (ID will be 0 until persisted)."""
        return cls(
            id=TopicId.generate(),
            user_id=user_id,
            title=title.strip(),
            description=description.strip() if description else None,
            difficulty=difficulty,
        )

    @classmethod
    def create_with_id(
        cls,
        id: TopicId,
        user_id: UserId,
        title: str,
        description: str | None,
        difficulty: str,
        created_at: datetime,
    ) -> "Topic":
        """Reconstitute a topic from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            title=title,
            description=description,
            difficulty=difficulty,
            created_at=created_at,
        )
