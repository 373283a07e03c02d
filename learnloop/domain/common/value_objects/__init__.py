"""Common value objects shared across all domain modules."""

from .ids import (
    AchievementId,
    FlashcardId,
    InterviewSetId,
    LearningSessionId,
    PostId,
    QuizId,
    TopicId,
    UserId,
)

__all__ = [
    "AchievementId",
    "FlashcardId",
    "InterviewSetId",
    "LearningSessionId",
    "PostId",
    "QuizId",
    "TopicId",
    "UserId",
]
