"""Use case for composing a viewer's feed."""

from learnloop.application.social.protocols.post_repository import PostRepositoryProtocol
from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.social.services.feed_ranking import FeedItem, FeedRankingPolicy
from learnloop.exceptions import ValidationError


class FeedUseCase:
    """Read-only feed composition behind a replaceable ranking policy."""

    def __init__(
        self,
        post_repository: PostRepositoryProtocol,
        ranking_policy: FeedRankingPolicy,
        max_limit: int = 100,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.post_repository = post_repository
        self.ranking_policy = ranking_policy
        self.max_limit = max_limit

    def compose_feed(self, user_id: str, limit: int = 20) -> list[FeedItem]:
        """
        Get the newest posts with the viewer's like flag.

        Args:
            user_id: ID of the viewer
            limit: Maximum number of items; values above the configured maximum
                are clamped

        Raises:
            ValidationError: If limit is not a positive integer
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError("Feed limit must be a positive integer")

        items = self.post_repository.list_recent_for_viewer(
            UserId(user_id), min(limit, self.max_limit)
        )
        return self.ranking_policy.rank(items)
