from dataclasses import dataclass

from ..entity import EntityId

MAX_USER_ID_LENGTH = 255


@dataclass(frozen=True)
class UserId(EntityId):
    """Opaque user identifier issued by the identity provider."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("UserId must be a non-empty string")
        if len(self.value) > MAX_USER_ID_LENGTH:
            raise ValueError(f"UserId cannot exceed {MAX_USER_ID_LENGTH} characters")


@dataclass(frozen=True)
class SerialId(EntityId):
    """Autoincrement primary key; 0 marks an entity not yet flushed."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise ValueError(f"{self.__class__.__name__} must be a non-negative integer")


class TopicId(SerialId):
    pass


class LearningSessionId(SerialId):
    pass


class QuizId(SerialId):
    pass


class FlashcardId(SerialId):
    pass


class InterviewSetId(SerialId):
    pass


class PostId(SerialId):
    pass


class AchievementId(SerialId):
    pass
