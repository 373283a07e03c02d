"""AI generated explanations, quizzes, flashcards, interview questions and chat."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError

from learnloop.application.learning.protocols.content_provider import ChatMessage
from learnloop.application.learning.use_cases.content_generation_use_case import (
    ContentGenerationUseCase,
)
from learnloop.config import get_settings
from learnloop.core import container
from learnloop.domain.common.exceptions import DomainError
from learnloop.exceptions import LearnLoopError
from learnloop.infrastructure.common.dependencies import require_ai_enabled
from learnloop.infrastructure.common.di import inject_use_case
from learnloop.infrastructure.common.rate_limit import limiter
from learnloop.infrastructure.identity.dependencies import CurrentUser
from learnloop.infrastructure.learning.schemas import (
    ChatRequestBody,
    ChatResponse,
    ExplainRequestBody,
    ExplanationResponse,
    FlashcardResponse,
    FlashcardsGenerateRequest,
    FlashcardsListResponse,
    InterviewGenerateRequest,
    InterviewSetResponse,
    QuizGenerateRequest,
    QuizResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

ContentUseCaseDependency = Annotated[
    ContentGenerationUseCase, Depends(inject_use_case(container.content_generation_use_case))
]

AI_RATE_LIMIT = get_settings().AI_RATE_LIMIT


def _unexpected(event: str, e: Exception, **context: object) -> HTTPException:
    logger.error(event, error=str(e), exc_info=True, **context)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.post("/explain")
@limiter.limit(AI_RATE_LIMIT)  # type: ignore[misc]
@require_ai_enabled
async def explain_topic(
    request: Request,
    payload: ExplainRequestBody,
    current_user: CurrentUser,
    use_case: ContentUseCaseDependency,
) -> ExplanationResponse:
    """Explain a topic at the requested difficulty."""
    try:
        result = await use_case.explain(payload.topic, payload.difficulty, payload.context)
        return ExplanationResponse(
            explanation=result.explanation,
            examples=result.examples,
            key_points=result.key_points,
        )
    except (LearnLoopError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("failed_to_explain_topic", e, user_id=current_user.id.value) from e


@router.post("/quiz")
@limiter.limit(AI_RATE_LIMIT)  # type: ignore[misc]
@require_ai_enabled
async def generate_quiz(
    request: Request,
    payload: QuizGenerateRequest,
    current_user: CurrentUser,
    use_case: ContentUseCaseDependency,
) -> QuizResponse:
    """
    Generate a multiple-choice quiz for an owned topic and store it.

    The quiz is graded later through the quiz submission endpoint.
    """
    try:
        quiz = await use_case.generate_quiz(
            user_id=current_user.id.value,
            topic_id=payload.topic_id,
            topic=payload.topic,
            question_count=payload.question_count,
        )
        return QuizResponse.from_entity(quiz)
    except (LearnLoopError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        raise _unexpected("failed_to_generate_quiz", e, topic_id=payload.topic_id) from e


@router.post("/flashcards")
@limiter.limit(AI_RATE_LIMIT)  # type: ignore[misc]
@require_ai_enabled
async def generate_flashcards(
    request: Request,
    payload: FlashcardsGenerateRequest,
    current_user: CurrentUser,
    use_case: ContentUseCaseDependency,
) -> FlashcardsListResponse:
    """Generate a flashcard deck for an owned topic and store it."""
    try:
        flashcards = await use_case.generate_flashcards(
            user_id=current_user.id.value,
            topic_id=payload.topic_id,
            topic=payload.topic,
            card_count=payload.card_count,
        )
        return FlashcardsListResponse(
            flashcards=[FlashcardResponse.from_entity(f) for f in flashcards]
        )
    except (LearnLoopError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        raise _unexpected("failed_to_generate_flashcards", e, topic_id=payload.topic_id) from e


@router.post("/interview")
@limiter.limit(AI_RATE_LIMIT)  # type: ignore[misc]
@require_ai_enabled
async def generate_interview_questions(
    request: Request,
    payload: InterviewGenerateRequest,
    current_user: CurrentUser,
    use_case: ContentUseCaseDependency,
) -> InterviewSetResponse:
    """Generate interview questions for a role and seniority level."""
    try:
        interview_set = await use_case.generate_interview(
            user_id=current_user.id.value,
            role=payload.role,
            level=payload.level,
            topic_id=payload.topic_id,
        )
        return InterviewSetResponse.from_entity(interview_set)
    except (LearnLoopError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        raise _unexpected("failed_to_generate_interview", e, role=payload.role) from e


@router.post("/chat")
@limiter.limit(AI_RATE_LIMIT)  # type: ignore[misc]
@require_ai_enabled
async def chat(
    request: Request,
    payload: ChatRequestBody,
    current_user: CurrentUser,
    use_case: ContentUseCaseDependency,
) -> ChatResponse:
    """Answer a study question, using the earlier conversation as context."""
    try:
        reply = await use_case.chat(
            payload.prompt,
            [ChatMessage(role=m.role, text=m.text) for m in payload.history],
        )
        return ChatResponse(reply=reply.reply)
    except (LearnLoopError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("failed_to_chat", e, user_id=current_user.id.value) from e
