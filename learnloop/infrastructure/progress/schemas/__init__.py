"""Progress context schemas."""

from learnloop.infrastructure.progress.schemas.progress_schemas import (
    AchievementResponse,
    AchievementsListResponse,
    ActivityProgress,
    LearningSessionResponse,
    LearningSessionsListResponse,
    UserProgressResponse,
)

__all__ = [
    "AchievementResponse",
    "AchievementsListResponse",
    "ActivityProgress",
    "LearningSessionResponse",
    "LearningSessionsListResponse",
    "UserProgressResponse",
]
