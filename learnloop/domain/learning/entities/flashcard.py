"""Flashcards generated for a topic."""

from dataclasses import dataclass
from datetime import datetime

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.exceptions import DomainError
from learnloop.domain.common.value_objects import FlashcardId, TopicId, UserId


@dataclass
class Flashcard(Entity[FlashcardId]):
    """One question/answer card; a generated deck is stored as a whole or not at all."""

    id: FlashcardId
    user_id: UserId
    topic_id: TopicId
    question: str
    answer: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.question or not self.question.strip():
            raise DomainError("Question cannot be empty")
        if not self.answer or not self.answer.strip():
            raise DomainError("Answer cannot be empty")

    @classmethod
    def create(cls, user_id: UserId, topic_id: TopicId, question: str, answer: str) -> "Flashcard":
        """Create a new flashcard (ID will be 0 until persisted)."""
        return cls(
            id=FlashcardId.generate(),
            user_id=user_id,
            topic_id=topic_id,
            question=question.strip(),
            answer=answer.strip(),
        )

    @classmethod
    def create_with_id(
        cls,
        id: FlashcardId,
        user_id: UserId,
        topic_id: TopicId,
        question: str,
        answer: str,
        created_at: datetime,
    ) -> "Flashcard":
        """Reconstitute a flashcard from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            topic_id=topic_id,
            question=question,
            answer=answer,
            created_at=created_at,
        )
