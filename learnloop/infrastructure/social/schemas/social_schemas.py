"""Pydantic schemas for posts, likes and the feed."""

from datetime import datetime

from pydantic import BaseModel, Field

from learnloop.application.social.use_cases.dtos import LikeToggleResult
from learnloop.domain.social.entities.post import Post
from learnloop.domain.social.services.feed_ranking import FeedItem


class PostCreateRequest(BaseModel):
    """Schema for creating a post. Length rules are enforced by the domain."""

    content: str = Field(..., description="Post text, 1 to 2000 characters")


class PostResponse(BaseModel):
    id: int
    user_id: str
    content: str
    like_count: int
    created_at: datetime | None

    @classmethod
    def from_entity(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id.value,
            user_id=post.user_id.value,
            content=post.content,
            like_count=post.like_count,
            created_at=post.created_at,
        )


class FeedItemResponse(PostResponse):
    liked_by_viewer: bool = Field(..., description="Whether the caller likes this post")

    @classmethod
    def from_item(cls, item: FeedItem) -> "FeedItemResponse":
        post = PostResponse.from_entity(item.post)
        return cls(**post.model_dump(), liked_by_viewer=item.liked_by_viewer)


class FeedResponse(BaseModel):
    items: list[FeedItemResponse]


class LikeToggleResponse(BaseModel):
    """Schema for the outcome of a like toggle."""

    post_id: int
    liked: bool
    state: str = Field(..., description="liked or unliked")
    like_count: int

    @classmethod
    def from_result(cls, result: LikeToggleResult) -> "LikeToggleResponse":
        return cls(
            post_id=result.post_id,
            liked=result.liked,
            state=result.state.value,
            like_count=result.like_count,
        )
