"""Use case for creating posts."""

import structlog

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.application.social.protocols.post_repository import PostRepositoryProtocol
from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.social.entities.post import Post

logger = structlog.get_logger(__name__)


class PostUseCase:
    def __init__(self, uow: UnitOfWork, post_repository: PostRepositoryProtocol) -> None:
        self.uow = uow
        self.post_repository = post_repository

    def create_post(self, user_id: str, content: str) -> Post:
        """
        Publish a post.

        Raises:
            ValidationError: If content is empty or too long
        """
        with self.uow:
            post = self.post_repository.add(Post.create(UserId(user_id), content))
            self.uow.commit()

        logger.info("post_created", post_id=post.id.value, user_id=user_id)
        return post
