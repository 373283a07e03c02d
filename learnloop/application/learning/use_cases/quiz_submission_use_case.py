"""Use case for grading a quiz submission."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.application.learning.protocols.study_material_repository import (
    StudyMaterialRepositoryProtocol,
)
from learnloop.application.progress.use_cases.dtos import ActivityResult
from learnloop.application.progress.use_cases.progress_ledger_use_case import (
    ProgressLedgerUseCase,
)
from learnloop.domain.common.exceptions import BusinessRuleViolationError
from learnloop.domain.common.value_objects.ids import QuizId, UserId
from learnloop.domain.progress.entities.learning_session import ActivityType
from learnloop.exceptions import QuizAlreadySubmittedError, QuizNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class QuizSubmissionResult:
    quiz_id: int
    score: int
    total_questions: int
    activity: ActivityResult


class QuizSubmissionUseCase:
    """Grades a quiz once and credits XP per correct answer."""

    def __init__(
        self,
        uow: UnitOfWork,
        material_repository: StudyMaterialRepositoryProtocol,
        progress_ledger: ProgressLedgerUseCase,
        xp_per_correct_answer: int = 5,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        """Initialize use case with repository protocols and the progress ledger."""
        self.uow = uow
        self.material_repository = material_repository
        self.progress_ledger = progress_ledger
        self.xp_per_correct_answer = xp_per_correct_answer
        self.now = now

    def submit(self, user_id: str, quiz_id: int, answers: list[int]) -> QuizSubmissionResult:
        """
        Grade a quiz and record a quiz learning session.

        Args:
            user_id: ID of the user
            quiz_id: ID of a quiz owned by the user
            answers: Selected option index per question, in question order

        Raises:
            QuizNotFoundError: If the quiz does not exist or is not owned by the user
            QuizAlreadySubmittedError: If the quiz was graded before
            ValidationError: If the answer count does not match the quiz
        """
        user_id_vo = UserId(user_id)
        quiz_id_vo = QuizId(quiz_id)

        with self.uow:
            quiz = self.material_repository.find_quiz(quiz_id_vo, user_id_vo)
            if quiz is None:
                raise QuizNotFoundError(quiz_id)
            try:
                score = quiz.grade(answers)
            except BusinessRuleViolationError:
                raise QuizAlreadySubmittedError(quiz_id) from None

            # Compare-and-set on an ungraded quiz so concurrent submissions grade once
            if not self.material_repository.record_quiz_score(
                quiz_id_vo, user_id_vo, score, self.now()
            ):
                self.uow.rollback()
                raise QuizAlreadySubmittedError(quiz_id)
            self.uow.commit()

        logger.info("quiz_submitted", quiz_id=quiz_id, user_id=user_id, score=score)

        activity = self.progress_ledger.record_activity(
            user_id=user_id,
            topic_id=quiz.topic_id.value,
            activity_type=ActivityType.QUIZ,
            xp_gained=score * self.xp_per_correct_answer,
        )
        return QuizSubmissionResult(
            quiz_id=quiz_id,
            score=score,
            total_questions=len(quiz.questions),
            activity=activity,
        )
