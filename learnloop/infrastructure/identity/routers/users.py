"""API routes for the caller's progress."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from learnloop.application.progress.use_cases.progress_ledger_use_case import (
    ProgressLedgerUseCase,
)
from learnloop.core import container
from learnloop.infrastructure.common.di import inject_use_case
from learnloop.infrastructure.identity.dependencies import CurrentUser
from learnloop.infrastructure.progress.schemas import (
    AchievementResponse,
    AchievementsListResponse,
    LearningSessionResponse,
    LearningSessionsListResponse,
    UserProgressResponse,
)

router = APIRouter(prefix="/users", tags=["users"])

LedgerDependency = Annotated[
    ProgressLedgerUseCase, Depends(inject_use_case(container.progress_ledger_use_case))
]


@router.get("/me")
def get_me(current_user: CurrentUser) -> UserProgressResponse:
    """Get the current user's XP, streak and last activity day."""
    return UserProgressResponse.from_entity(current_user)


@router.get("/me/achievements")
def get_my_achievements(
    current_user: CurrentUser, use_case: LedgerDependency
) -> AchievementsListResponse:
    """Get the achievements the current user has unlocked."""
    achievements = use_case.list_achievements(current_user.id.value)
    return AchievementsListResponse(
        achievements=[AchievementResponse.from_entity(a) for a in achievements]
    )


@router.get("/me/learning_sessions")
def get_my_learning_sessions(
    current_user: CurrentUser,
    use_case: LedgerDependency,
    limit: Annotated[int, Query(description="Maximum number of sessions")] = 20,
) -> LearningSessionsListResponse:
    """
    Get the current user's learning session audit trail, newest first.

    Each entry says whether its XP was applied to the user's total.
    """
    entries = use_case.list_learning_sessions(current_user.id.value, limit)
    return LearningSessionsListResponse(
        sessions=[LearningSessionResponse.from_entry(e) for e in entries]
    )
