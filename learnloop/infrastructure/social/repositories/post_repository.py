"""Repository for Post domain entities."""

from sqlalchemy import and_, select, update
from sqlalchemy.orm import Session, aliased

from learnloop.domain.common.value_objects.ids import PostId, UserId
from learnloop.domain.social.entities.post import Post
from learnloop.domain.social.services.feed_ranking import FeedItem
from learnloop.infrastructure.social.mappers.post_mapper import PostMapper
from learnloop.models import Post as PostORM
from learnloop.models import PostLike as PostLikeORM


class PostRepository:
    """Repository for Post domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = PostMapper()

    def add(self, post: Post) -> Post:
        """
        Insert a post.

        Returns:
            Post with database-generated id and timestamp
        """
        orm_model = self.mapper.to_orm(post)
        self.db.add(orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def find_by_id(self, post_id: PostId, for_update: bool = False) -> Post | None:
        """
        Find a post by ID.

        Args:
            post_id: The post ID
            for_update: Take a row lock (SELECT ... FOR UPDATE); SQLite ignores it

        Returns:
            Post entity if found, None otherwise
        """
        stmt = (
            select(PostORM)
            .where(PostORM.id == post_id.value)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def increment_like_count(self, post_id: PostId, delta: int) -> int:
        """
        Atomically adjust the like count in a single UPDATE ... RETURNING.

        Args:
            post_id: The post ID
            delta: +1 or -1

        Returns:
            New like count
        """
        stmt = (
            update(PostORM)
            .where(PostORM.id == post_id.value)
            .values(like_count=PostORM.like_count + delta)
            .returning(PostORM.like_count)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).scalar_one()

    def list_recent_for_viewer(self, viewer_id: UserId, limit: int) -> list[FeedItem]:
        """
        Newest posts with the viewer's like flag.

        Counts and flags come from one SELECT, so they reflect a single snapshot.

        Args:
            viewer_id: The viewing user's ID
            limit: Maximum number of posts

        Returns:
            Feed items ordered by created_at DESC, id DESC
        """
        viewer_like = aliased(PostLikeORM)
        stmt = (
            select(PostORM, viewer_like.id.is_not(None))
            .outerjoin(
                viewer_like,
                and_(viewer_like.post_id == PostORM.id, viewer_like.user_id == viewer_id.value),
            )
            .order_by(PostORM.created_at.desc(), PostORM.id.desc())
            .limit(limit)
        )
        return [
            FeedItem(post=self.mapper.to_domain(orm), liked_by_viewer=bool(liked))
            for orm, liked in self.db.execute(stmt)
        ]
