"""API routes for quiz submission."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.exc import SQLAlchemyError

from learnloop.application.learning.use_cases.quiz_submission_use_case import (
    QuizSubmissionUseCase,
)
from learnloop.core import container
from learnloop.domain.common.exceptions import DomainError
from learnloop.exceptions import LearnLoopError
from learnloop.infrastructure.common.di import inject_use_case
from learnloop.infrastructure.identity.dependencies import CurrentUser
from learnloop.infrastructure.learning.schemas import QuizSubmitRequest, QuizSubmitResponse
from learnloop.infrastructure.progress.schemas import ActivityProgress

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.post("/{quiz_id}/submit")
def submit_quiz(
    quiz_id: Annotated[int, Path(ge=1)],
    payload: QuizSubmitRequest,
    current_user: CurrentUser,
    use_case: Annotated[
        QuizSubmissionUseCase, Depends(inject_use_case(container.quiz_submission_use_case))
    ],
) -> QuizSubmitResponse:
    """
    Grade a quiz. A quiz can be submitted once.

    Grants XP per correct answer through a quiz learning session.
    """
    try:
        result = use_case.submit(current_user.id.value, quiz_id, payload.answers)
        return QuizSubmitResponse(
            quiz_id=result.quiz_id,
            score=result.score,
            total_questions=result.total_questions,
            progress=ActivityProgress.from_result(result.activity),
        )
    except (LearnLoopError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error("failed_to_submit_quiz", quiz_id=quiz_id, error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
