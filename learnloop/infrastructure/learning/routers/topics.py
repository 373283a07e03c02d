"""API routes for study topics."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from learnloop.application.learning.use_cases.topic_use_case import TopicUseCase
from learnloop.core import container
from learnloop.domain.common.exceptions import DomainError
from learnloop.exceptions import LearnLoopError
from learnloop.infrastructure.common.di import inject_use_case
from learnloop.infrastructure.identity.dependencies import CurrentUser
from learnloop.infrastructure.learning.schemas import (
    TopicCreateRequest,
    TopicCreateResponse,
    TopicResponse,
    TopicsListResponse,
)
from learnloop.infrastructure.progress.schemas import ActivityProgress

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/topics", tags=["topics"])

TopicUseCaseDependency = Annotated[
    TopicUseCase, Depends(inject_use_case(container.topic_use_case))
]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_topic(
    payload: TopicCreateRequest,
    current_user: CurrentUser,
    use_case: TopicUseCaseDependency,
) -> TopicCreateResponse:
    """
    Create a study topic.

    Counts as a study activity: grants XP and updates the daily streak.
    """
    try:
        created = use_case.create_topic(
            user_id=current_user.id.value,
            title=payload.title,
            description=payload.description,
            difficulty=payload.difficulty,
        )
        return TopicCreateResponse(
            topic=TopicResponse.from_entity(created.topic),
            progress=ActivityProgress.from_result(created.activity),
        )
    except (LearnLoopError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(
            "failed_to_create_topic",
            user_id=current_user.id.value,
            error=str(e),
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("")
def list_topics(current_user: CurrentUser, use_case: TopicUseCaseDependency) -> TopicsListResponse:
    """List the current user's topics, newest first."""
    topics = use_case.list_topics(current_user.id.value)
    return TopicsListResponse(topics=[TopicResponse.from_entity(t) for t in topics])
