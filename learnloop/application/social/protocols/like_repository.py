"""Protocol for PostLike repository."""

from typing import Protocol

from learnloop.domain.common.value_objects.ids import PostId, UserId


class LikeRepositoryProtocol(Protocol):
    """Protocol for the (post, user) like relation."""

    def insert_if_absent(self, post_id: PostId, user_id: UserId) -> bool:
        """
        Insert the like row unless the pair already exists.

        Returns:
            True if a row was created
        """
        ...

    def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """
        Delete the like row for the pair.

        Returns:
            True if a row was deleted
        """
        ...

    def exists(self, post_id: PostId, user_id: UserId) -> bool:
        """Whether the user currently likes the post."""
        ...
