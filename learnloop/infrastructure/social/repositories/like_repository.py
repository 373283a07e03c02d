"""Repository for the (post, user) like relation."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from learnloop.domain.common.value_objects.ids import PostId, UserId
from learnloop.infrastructure.common.sql import insert_ignore
from learnloop.models import PostLike as PostLikeORM


class LikeRepository:
    """Repository for PostLike rows. Uniqueness per pair is enforced by the database."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def insert_if_absent(self, post_id: PostId, user_id: UserId) -> bool:
        """
        Insert the like row unless the pair already exists.

        Returns:
            True if a row was created
        """
        return insert_ignore(
            self.db,
            PostLikeORM,
            {"post_id": post_id.value, "user_id": user_id.value},
            conflict_columns=["post_id", "user_id"],
        )

    def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """
        Delete the like row for the pair.

        Returns:
            True if a row was deleted
        """
        stmt = delete(PostLikeORM).where(
            PostLikeORM.post_id == post_id.value,
            PostLikeORM.user_id == user_id.value,
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    def exists(self, post_id: PostId, user_id: UserId) -> bool:
        """Whether the user currently likes the post."""
        stmt = select(PostLikeORM.id).where(
            PostLikeORM.post_id == post_id.value,
            PostLikeORM.user_id == user_id.value,
        )
        return self.db.execute(stmt).first() is not None
