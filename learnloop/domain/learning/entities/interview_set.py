"""Interview question set generated for a role."""

from dataclasses import dataclass, field
from datetime import datetime

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.exceptions import ValidationError
from learnloop.domain.common.value_object import ValueObject
from learnloop.domain.common.value_objects import InterviewSetId, TopicId, UserId


@dataclass(frozen=True)
class InterviewQuestion(ValueObject):
    question: str
    category: str
    sample_answer: str

    def to_dict(self) -> dict[str, str]:
        return {
            "question": self.question,
            "category": self.category,
            "sample_answer": self.sample_answer,
        }


@dataclass
class InterviewSet(Entity[InterviewSetId]):
    """
    Interview preparation questions for a role and seniority level.

    Business Rules:
    - Role cannot be empty
    - Has at least one question
    """

    id: InterviewSetId
    user_id: UserId
    role: str
    level: str
    questions: list[InterviewQuestion] = field(default_factory=list)
    topic_id: TopicId | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.role or not self.role.strip():
            raise ValidationError("Role cannot be empty", field="role")
        if not self.questions:
            raise ValidationError("Interview set must have at least one question", field="questions")

    @classmethod
    def create(
        cls,
        user_id: UserId,
        role: str,
        level: str,
        questions: list[InterviewQuestion],
        topic_id: TopicId | None = None,
    ) -> "InterviewSet":
        """Create a new interview set (ID will be 0 until persisted)."""
        return cls(
            id=InterviewSetId.generate(),
            user_id=user_id,
            role=role.strip(),
            level=level,
            questions=questions,
            topic_id=topic_id,
        )

    @classmethod
    def create_with_id(
        cls,
        id: InterviewSetId,
        user_id: UserId,
        role: str,
        level: str,
        questions: list[InterviewQuestion],
        topic_id: TopicId | None,
        created_at: datetime,
    ) -> "InterviewSet":
        """Reconstitute an interview set from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            role=role,
            level=level,
            questions=questions,
            topic_id=topic_id,
            created_at=created_at,
        )
