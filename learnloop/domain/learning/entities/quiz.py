"""
Quiz entity, stored verbatim from one content provider response.
"""

from dataclasses import dataclass, field
from datetime import datetime

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from learnloop.domain.common.value_object import ValueObject
from learnloop.domain.common.value_objects import QuizId, TopicId, UserId


@dataclass(frozen=True)
class QuizQuestion(ValueObject):
    """Multiple-choice question; ``correct_answer`` indexes into ``options``."""

    question: str
    options: tuple[str, ...]
    correct_answer: int
    explanation: str = ""

    def __post_init__(self) -> None:
        if not self.question.strip():
            raise ValidationError("Quiz question cannot be empty", field="question")
        if len(self.options) < 2:
            raise ValidationError("Quiz question needs at least two options", field="options")
        if not 0 <= self.correct_answer < len(self.options):
            raise ValidationError(
                "Correct answer must index one of the options",
                field="correct_answer",
                value=self.correct_answer,
            )

    def to_dict(self) -> dict[str, object]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "explanation": self.explanation,
        }


@dataclass
class Quiz(Entity[QuizId]):
    """
    A generated quiz.

    Business Rules:
    - Has at least one question
    - Can be graded once; score stays None until submission
    """

    id: QuizId
    user_id: UserId
    topic_id: TopicId
    title: str
    questions: list[QuizQuestion] = field(default_factory=list)
    score: int | None = None
    submitted_at: datetime | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.questions:
            raise ValidationError("Quiz must have at least one question", field="questions")

    @property
    def is_submitted(self) -> bool:
        return self.score is not None

    def grade(self, answers: list[int]) -> int:
        """
        Count correct answers without mutating the quiz.

        Raises:
            BusinessRuleViolationError: If the quiz was already graded
            ValidationError: If the answer count does not match the question count
        """
        if self.is_submitted:
            raise BusinessRuleViolationError("quiz_graded_once", "Quiz was already submitted")
        if len(answers) != len(self.questions):
            raise ValidationError(
                f"Expected {len(self.questions)} answers, got {len(answers)}", field="answers"
            )
        return sum(
            1
            for question, answer in zip(self.questions, answers, strict=True)
            if question.correct_answer == answer
        )

    @classmethod
    def create(
        cls, user_id: UserId, topic_id: TopicId, title: str, questions: list[QuizQuestion]
    ) -> "Quiz":
        """Create a new quiz (ID will be 0 until persisted)."""
        return cls(
            id=QuizId.generate(),
            user_id=user_id,
            topic_id=topic_id,
            title=title,
            questions=questions,
        )

    @classmethod
    def create_with_id(
        cls,
        id: QuizId,
        user_id: UserId,
        topic_id: TopicId,
        title: str,
        questions: list[QuizQuestion],
        score: int | None,
        submitted_at: datetime | None,
        created_at: datetime,
    ) -> "Quiz":
        """Reconstitute a quiz from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            topic_id=topic_id,
            title=title,
            questions=questions,
            score=score,
            submitted_at=submitted_at,
            created_at=created_at,
        )
