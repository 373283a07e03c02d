"""Mappers for generated study material ORM ↔ Domain conversion."""

from typing import Any

from learnloop.domain.common.value_objects.ids import (
    FlashcardId,
    InterviewSetId,
    QuizId,
    TopicId,
    UserId,
)
from learnloop.domain.learning.entities.flashcard import Flashcard
from learnloop.domain.learning.entities.interview_set import InterviewQuestion, InterviewSet
from learnloop.domain.learning.entities.quiz import Quiz, QuizQuestion
from learnloop.models import Flashcard as FlashcardORM
from learnloop.models import InterviewSet as InterviewSetORM
from learnloop.models import Quiz as QuizORM


class QuizMapper:
    """Mapper for Quiz ORM ↔ Domain conversion. Questions are stored as JSON."""

    def to_domain(self, orm_model: QuizORM) -> Quiz:
        """Convert ORM model to domain entity."""
        return Quiz.create_with_id(
            id=QuizId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            topic_id=TopicId(orm_model.topic_id),
            title=orm_model.title,
            questions=[self._question_to_domain(q) for q in orm_model.questions],
            score=orm_model.score,
            submitted_at=orm_model.submitted_at,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Quiz) -> QuizORM:
        """Convert a new domain entity to an ORM model."""
        return QuizORM(
            user_id=domain_entity.user_id.value,
            topic_id=domain_entity.topic_id.value,
            title=domain_entity.title,
            questions=[q.to_dict() for q in domain_entity.questions],
        )

    @staticmethod
    def _question_to_domain(data: dict[str, Any]) -> QuizQuestion:
        return QuizQuestion(
            question=data["question"],
            options=tuple(data["options"]),
            correct_answer=data["correct_answer"],
            explanation=data.get("explanation", ""),
        )


class FlashcardMapper:
    """Mapper for Flashcard ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: FlashcardORM) -> Flashcard:
        """Convert ORM model to domain entity."""
        return Flashcard.create_with_id(
            id=FlashcardId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            topic_id=TopicId(orm_model.topic_id),
            question=orm_model.question,
            answer=orm_model.answer,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Flashcard) -> FlashcardORM:
        """Convert a new domain entity to an ORM model."""
        return FlashcardORM(
            user_id=domain_entity.user_id.value,
            topic_id=domain_entity.topic_id.value,
            question=domain_entity.question,
            answer=domain_entity.answer,
        )


class InterviewSetMapper:
    """Mapper for InterviewSet ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: InterviewSetORM) -> InterviewSet:
        """Convert ORM model to domain entity."""
        return InterviewSet.create_with_id(
            id=InterviewSetId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            role=orm_model.role,
            level=orm_model.level,
            questions=[
                InterviewQuestion(
                    question=q["question"],
                    category=q["category"],
                    sample_answer=q["sample_answer"],
                )
                for q in orm_model.questions
            ],
            topic_id=TopicId(orm_model.topic_id) if orm_model.topic_id else None,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: InterviewSet) -> InterviewSetORM:
        """Convert a new domain entity to an ORM model."""
        return InterviewSetORM(
            user_id=domain_entity.user_id.value,
            topic_id=domain_entity.topic_id.value if domain_entity.topic_id else None,
            role=domain_entity.role,
            level=domain_entity.level,
            questions=[q.to_dict() for q in domain_entity.questions],
        )
