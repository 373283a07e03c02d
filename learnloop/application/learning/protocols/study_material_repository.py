"""Protocol for generated study material (quizzes, flashcards, interview sets)."""

from datetime import datetime
from typing import Protocol

from learnloop.domain.common.value_objects.ids import QuizId, UserId
from learnloop.domain.learning.entities.flashcard import Flashcard
from learnloop.domain.learning.entities.interview_set import InterviewSet
from learnloop.domain.learning.entities.quiz import Quiz


class StudyMaterialRepositoryProtocol(Protocol):
    """Protocol for persisting generated study material."""

    def add_quiz(self, quiz: Quiz) -> Quiz:
        """Insert a quiz and return it with database-generated values."""
        ...

    def find_quiz(self, quiz_id: QuizId, user_id: UserId) -> Quiz | None:
        """Find a quiz by ID with user ownership check."""
        ...

    def record_quiz_score(
        self, quiz_id: QuizId, user_id: UserId, score: int, submitted_at: datetime
    ) -> bool:
        """
        Store the score only if the quiz has not been graded yet.

        Returns:
            True if this call graded the quiz
        """
        ...

    def add_flashcards(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """Insert a whole deck; callers commit it in a single transaction."""
        ...

    def add_interview_set(self, interview_set: InterviewSet) -> InterviewSet:
        """Insert an interview set and return it with database-generated values."""
        ...
