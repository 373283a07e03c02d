"""Protocol for Post repository."""

from typing import Protocol

from learnloop.domain.common.value_objects.ids import PostId, UserId
from learnloop.domain.social.entities.post import Post
from learnloop.domain.social.services.feed_ranking import FeedItem


class PostRepositoryProtocol(Protocol):
    """Protocol for Post persistence."""

    def add(self, post: Post) -> Post:
        """Insert a post and return it with database-generated values."""
        ...

    def find_by_id(self, post_id: PostId, for_update: bool = False) -> Post | None:
        """Find a post by ID, optionally locking its row until the transaction ends."""
        ...

    def increment_like_count(self, post_id: PostId, delta: int) -> int:
        """
        Atomically adjust the denormalised like count.

        Returns:
            The new like count
        """
        ...

    def list_recent_for_viewer(self, viewer_id: UserId, limit: int) -> list[FeedItem]:
        """
        Newest posts with the viewer's like flag, read in a single statement.
        """
        ...
