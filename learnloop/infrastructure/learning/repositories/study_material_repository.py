"""Repository for generated quizzes, flashcards and interview sets."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from learnloop.domain.common.value_objects.ids import QuizId, UserId
from learnloop.domain.learning.entities.flashcard import Flashcard
from learnloop.domain.learning.entities.interview_set import InterviewSet
from learnloop.domain.learning.entities.quiz import Quiz
from learnloop.infrastructure.learning.mappers.study_material_mapper import (
    FlashcardMapper,
    InterviewSetMapper,
    QuizMapper,
)
from learnloop.models import Quiz as QuizORM


class StudyMaterialRepository:
    """Repository for study material produced by the content provider."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.quiz_mapper = QuizMapper()
        self.flashcard_mapper = FlashcardMapper()
        self.interview_set_mapper = InterviewSetMapper()

    def add_quiz(self, quiz: Quiz) -> Quiz:
        """Insert a quiz and return it with database-generated values."""
        orm_model = self.quiz_mapper.to_orm(quiz)
        self.db.add(orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        return self.quiz_mapper.to_domain(orm_model)

    def find_quiz(self, quiz_id: QuizId, user_id: UserId) -> Quiz | None:
        """
        Find a quiz by ID with user ownership check.

        Returns:
            Quiz entity if found and owned by user, None otherwise
        """
        stmt = (
            select(QuizORM)
            .where(QuizORM.id == quiz_id.value, QuizORM.user_id == user_id.value)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.quiz_mapper.to_domain(orm_model) if orm_model else None

    def record_quiz_score(
        self, quiz_id: QuizId, user_id: UserId, score: int, submitted_at: datetime
    ) -> bool:
        """
        Store the score only while the quiz is still ungraded.

        Returns:
            True if this call graded the quiz
        """
        stmt = (
            update(QuizORM)
            .where(
                QuizORM.id == quiz_id.value,
                QuizORM.user_id == user_id.value,
                QuizORM.score.is_(None),
            )
            .values(score=score, submitted_at=submitted_at)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    def add_flashcards(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """
        Insert a whole deck.

        The caller commits once, so a deck is stored completely or not at all.
        """
        orm_models = [self.flashcard_mapper.to_orm(f) for f in flashcards]
        self.db.add_all(orm_models)
        self.db.flush()
        for orm_model in orm_models:
            self.db.refresh(orm_model)
        return [self.flashcard_mapper.to_domain(orm) for orm in orm_models]

    def add_interview_set(self, interview_set: InterviewSet) -> InterviewSet:
        """Insert an interview set and return it with database-generated values."""
        orm_model = self.interview_set_mapper.to_orm(interview_set)
        self.db.add(orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        return self.interview_set_mapper.to_domain(orm_model)
