"""API routes for posts, likes and the feed."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from learnloop.application.social.use_cases.feed_use_case import FeedUseCase
from learnloop.application.social.use_cases.like_toggle_use_case import LikeToggleUseCase
from learnloop.application.social.use_cases.post_use_case import PostUseCase
from learnloop.config import get_settings
from learnloop.core import container
from learnloop.domain.common.exceptions import DomainError
from learnloop.exceptions import LearnLoopError
from learnloop.infrastructure.common.di import inject_use_case
from learnloop.infrastructure.identity.dependencies import CurrentUser
from learnloop.infrastructure.social.schemas import (
    FeedItemResponse,
    FeedResponse,
    LikeToggleResponse,
    PostCreateRequest,
    PostResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["social"])


@router.post("/posts", status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreateRequest,
    current_user: CurrentUser,
    use_case: Annotated[PostUseCase, Depends(inject_use_case(container.post_use_case))],
) -> PostResponse:
    """Publish a post with zero likes."""
    try:
        post = use_case.create_post(current_user.id.value, payload.content)
        return PostResponse.from_entity(post)
    except (LearnLoopError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(
            "failed_to_create_post", user_id=current_user.id.value, error=str(e), exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/posts/{post_id}/like")
async def toggle_like(
    post_id: Annotated[int, Path(ge=1)],
    current_user: CurrentUser,
    use_case: Annotated[
        LikeToggleUseCase, Depends(inject_use_case(container.like_toggle_use_case))
    ],
) -> LikeToggleResponse:
    """
    Like the post, or unlike it when the caller already likes it.

    The toggle runs in the threadpool so a write waiting on a row lock does
    not stall the event loop. The new state is pushed to live update
    subscribers after it is stored.
    """
    try:
        result = await run_in_threadpool(use_case.toggle_like, post_id, current_user.id.value)
    except (LearnLoopError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error("failed_to_toggle_like", post_id=post_id, error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    response = LikeToggleResponse.from_result(result)
    if get_settings().LIVE_UPDATES_ENABLED:
        await container.like_broadcaster().broadcast(
            "like_toggled", {"user_id": result.user_id, **response.model_dump()}
        )
    return response


@router.get("/feed")
def get_feed(
    current_user: CurrentUser,
    use_case: Annotated[FeedUseCase, Depends(inject_use_case(container.feed_use_case))],
    limit: Annotated[int | None, Query(description="Maximum number of posts")] = None,
) -> FeedResponse:
    """
    Get the newest posts, each flagged with whether the caller likes it.

    Limits above the server maximum are clamped; zero or negative limits are
    rejected.
    """
    if limit is None:
        limit = get_settings().FEED_DEFAULT_LIMIT
    items = use_case.compose_feed(current_user.id.value, limit)
    return FeedResponse(items=[FeedItemResponse.from_item(i) for i in items])
