"""
Feed ranking policies.

A policy orders candidate feed items; the repository supplies candidates in
the policy's preferred order where it can, and the policy is applied again in
memory so custom policies need no query changes.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from learnloop.domain.social.entities.post import Post


@dataclass(frozen=True)
class FeedItem:
    """A post as seen by one viewer."""

    post: Post
    liked_by_viewer: bool


class FeedRankingPolicy(Protocol):
    """Orders feed items for a viewer."""

    def rank(self, items: list[FeedItem]) -> list[FeedItem]: ...


_EPOCH = datetime.min.replace(tzinfo=UTC)


def _created_at(item: FeedItem) -> datetime:
    created_at = item.post.created_at
    if created_at is None:
        return _EPOCH
    # SQLite drops tzinfo on the way back
    return created_at if created_at.tzinfo else created_at.replace(tzinfo=UTC)


class NewestFirstPolicy:
    """Most recent posts first, ties broken by descending id."""

    def rank(self, items: list[FeedItem]) -> list[FeedItem]:
        return sorted(
            items,
            key=lambda item: (_created_at(item), item.post.id.value),
            reverse=True,
        )
