"""Social context schemas."""

from learnloop.infrastructure.social.schemas.social_schemas import (
    FeedItemResponse,
    FeedResponse,
    LikeToggleResponse,
    PostCreateRequest,
    PostResponse,
)

__all__ = [
    "FeedItemResponse",
    "FeedResponse",
    "LikeToggleResponse",
    "PostCreateRequest",
    "PostResponse",
]
