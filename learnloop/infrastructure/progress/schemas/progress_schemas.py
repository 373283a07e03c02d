"""Pydantic schemas for progress API responses."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from learnloop.application.progress.use_cases.dtos import ActivityResult, SessionAuditEntry
from learnloop.domain.identity.entities.user import User
from learnloop.domain.progress.entities.achievement import Achievement


class UserProgressResponse(BaseModel):
    """Schema for a user's progress counters."""

    id: str
    display_name: str | None = None
    xp: int = Field(..., ge=0, description="Total experience points")
    streak: int = Field(..., ge=0, description="Consecutive active days")
    last_activity_date: date | None = Field(None, description="Day of the last accepted activity")

    @classmethod
    def from_entity(cls, user: User) -> "UserProgressResponse":
        return cls(
            id=user.id.value,
            display_name=user.display_name,
            xp=user.xp,
            streak=user.streak,
            last_activity_date=user.last_activity_date,
        )


class ActivityProgress(BaseModel):
    """Schema for the progress produced by one recorded learning session."""

    session_id: int
    activity_type: str
    xp_gained: int
    xp: int = Field(..., description="User's XP total after the activity")
    streak: int = Field(..., description="User's streak after the activity")
    last_activity_date: date | None = None
    unlocked_achievements: list[str] = Field(
        default_factory=list, description="Criteria keys unlocked by this activity"
    )

    @classmethod
    def from_result(cls, result: ActivityResult) -> "ActivityProgress":
        return cls(
            session_id=result.session.id.value,
            activity_type=result.session.activity_type.value,
            xp_gained=result.session.xp_gained,
            xp=result.xp,
            streak=result.streak.streak,
            last_activity_date=result.streak.last_activity_date,
            unlocked_achievements=[c.key for c in result.unlocked],
        )


class AchievementResponse(BaseModel):
    """Schema for an unlocked achievement."""

    id: int
    criteria: str
    title: str
    unlocked_at: datetime | None

    @classmethod
    def from_entity(cls, achievement: Achievement) -> "AchievementResponse":
        return cls(
            id=achievement.id.value,
            criteria=achievement.criteria,
            title=achievement.title,
            unlocked_at=achievement.unlocked_at,
        )


class AchievementsListResponse(BaseModel):
    achievements: list[AchievementResponse]


class LearningSessionResponse(BaseModel):
    """Schema for a learning session audit entry."""

    id: int
    topic_id: int | None
    activity_type: str
    xp_gained: int
    xp_applied: bool = Field(..., description="Whether the session's XP reached the user total")
    created_at: datetime | None

    @classmethod
    def from_entry(cls, entry: SessionAuditEntry) -> "LearningSessionResponse":
        session = entry.session
        return cls(
            id=session.id.value,
            topic_id=session.topic_id.value if session.topic_id else None,
            activity_type=session.activity_type.value,
            xp_gained=session.xp_gained,
            xp_applied=entry.xp_applied,
            created_at=session.created_at,
        )


class LearningSessionsListResponse(BaseModel):
    sessions: list[LearningSessionResponse]
