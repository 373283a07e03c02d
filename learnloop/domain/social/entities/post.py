"""Post entity for the social feed."""

from dataclasses import dataclass
from datetime import datetime

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.exceptions import ValidationError
from learnloop.domain.common.value_objects import PostId, UserId

MAX_POST_CONTENT_LENGTH = 2000


@dataclass
class Post(Entity[PostId]):
    """
    A post in the social feed.

    Business Rules:
    - Content is non-empty and immutable after creation
    - like_count is a denormalised count of like rows, never negative
    """

    id: PostId
    user_id: UserId
    content: str
    like_count: int = 0
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.content or not self.content.strip():
            raise ValidationError("Post content cannot be empty", field="content")
        if len(self.content) > MAX_POST_CONTENT_LENGTH:
            raise ValidationError(
                f"Post content cannot exceed {MAX_POST_CONTENT_LENGTH} characters",
                field="content",
            )
        if self.like_count < 0:
            raise ValidationError(
                "Like count cannot be negative", field="like_count", value=self.like_count
            )

    @classmethod
    def create(cls, user_id: UserId, content: str) -> "Post":
        """Create a new post (ID will be 0 until persisted)."""
        return cls(id=PostId.generate(), user_id=user_id, content=content.strip())

    @classmethod
    def create_with_id(
        cls,
        id: PostId,
        user_id: UserId,
        content: str,
        like_count: int,
        created_at: datetime,
    ) -> "Post":
        """Reconstitute a post from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            content=content,
            like_count=like_count,
            created_at=created_at,
        )
