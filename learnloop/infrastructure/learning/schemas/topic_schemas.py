"""Pydantic schemas for Topic API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from learnloop.domain.learning.entities.topic import Topic
from learnloop.infrastructure.progress.schemas import ActivityProgress


class TopicCreateRequest(BaseModel):
    """Schema for creating a topic."""

    title: str = Field(..., min_length=1, max_length=200, description="Topic title")
    description: str | None = Field(None, description="Optional notes about the topic")
    difficulty: str = Field("beginner", min_length=1, max_length=20)


class TopicResponse(BaseModel):
    id: int
    title: str
    description: str | None
    difficulty: str
    created_at: datetime | None

    @classmethod
    def from_entity(cls, topic: Topic) -> "TopicResponse":
        return cls(
            id=topic.id.value,
            title=topic.title,
            description=topic.description,
            difficulty=topic.difficulty,
            created_at=topic.created_at,
        )


class TopicCreateResponse(BaseModel):
    topic: TopicResponse
    progress: ActivityProgress = Field(..., description="Progress from the study session")


class TopicsListResponse(BaseModel):
    topics: list[TopicResponse]
