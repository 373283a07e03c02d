"""Use case for toggling a like on a post."""

import structlog

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.application.social.protocols.like_repository import LikeRepositoryProtocol
from learnloop.application.social.protocols.post_repository import PostRepositoryProtocol
from learnloop.application.social.use_cases.dtos import LikeToggleResult
from learnloop.domain.common.value_objects.ids import PostId, UserId
from learnloop.domain.social.entities.like import LikeState
from learnloop.exceptions import PostNotFoundError

logger = structlog.get_logger(__name__)


class LikeToggleUseCase:
    """Use case for the idempotent like/unlike toggle."""

    def __init__(
        self,
        uow: UnitOfWork,
        post_repository: PostRepositoryProtocol,
        like_repository: LikeRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.uow = uow
        self.post_repository = post_repository
        self.like_repository = like_repository

    def toggle_like(self, post_id: int, user_id: str) -> LikeToggleResult:
        """
        Flip the user's like on a post.

        The like row and the post's like count change in one transaction.
        Toggles on one post are serialized by a row lock on the post, so a
        concurrent duplicate sees the committed result of the first and flips
        it again. Where the store cannot lock rows and a concurrent toggle for
        the same pair inserted the row first, nothing is flipped and the
        current state is returned.

        Args:
            post_id: ID of the post
            user_id: ID of the user

        Returns:
            LikeToggleResult with the new state and like count

        Raises:
            PostNotFoundError: If the post does not exist
        """
        post_id_vo = PostId(post_id)
        user_id_vo = UserId(user_id)

        with self.uow:
            post = self.post_repository.find_by_id(post_id_vo, for_update=True)
            if post is None:
                raise PostNotFoundError(post_id)

            if self.like_repository.delete(post_id_vo, user_id_vo):
                like_count = self.post_repository.increment_like_count(post_id_vo, -1)
                state = LikeState.UNLIKED
            elif self.like_repository.insert_if_absent(post_id_vo, user_id_vo):
                like_count = self.post_repository.increment_like_count(post_id_vo, 1)
                state = LikeState.LIKED
            else:
                # Another writer created the row between our delete and insert
                self.uow.rollback()
                return self._current_state(post_id_vo, user_id_vo)

            self.uow.commit()

        logger.info(
            "like_toggled",
            post_id=post_id,
            user_id=user_id,
            state=state.value,
            like_count=like_count,
        )
        return LikeToggleResult(
            post_id=post_id, user_id=user_id, state=state, like_count=like_count
        )

    def _current_state(self, post_id: PostId, user_id: UserId) -> LikeToggleResult:
        liked = self.like_repository.exists(post_id, user_id)
        post = self.post_repository.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id.value)
        logger.warning(
            "like_toggle_conflict",
            post_id=post_id.value,
            user_id=user_id.value,
            liked=liked,
        )
        return LikeToggleResult(
            post_id=post_id.value,
            user_id=user_id.value,
            state=LikeState.from_liked(liked),
            like_count=post.like_count,
        )
