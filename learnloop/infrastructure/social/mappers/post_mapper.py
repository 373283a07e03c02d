"""Mapper for Post ORM ↔ Domain conversion."""

from learnloop.domain.common.value_objects.ids import PostId, UserId
from learnloop.domain.social.entities.post import Post
from learnloop.models import Post as PostORM


class PostMapper:
    """Mapper for Post ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: PostORM) -> Post:
        """Convert ORM model to domain entity."""
        return Post.create_with_id(
            id=PostId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            content=orm_model.content,
            like_count=orm_model.like_count,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Post) -> PostORM:
        """Convert a new domain entity to an ORM model. Content is immutable."""
        return PostORM(
            user_id=domain_entity.user_id.value,
            content=domain_entity.content,
            like_count=domain_entity.like_count,
        )
