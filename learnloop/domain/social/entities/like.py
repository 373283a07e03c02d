"""Like state for a (post, user) pair."""

from enum import StrEnum


class LikeState(StrEnum):
    """
    Two-state machine per (post, user) pair.

    Initial state is UNLIKED; a toggle flips it and is its own inverse.
    """

    UNLIKED = "unliked"
    LIKED = "liked"

    @property
    def liked(self) -> bool:
        return self is LikeState.LIKED

    def flipped(self) -> "LikeState":
        return LikeState.UNLIKED if self.liked else LikeState.LIKED

    @classmethod
    def from_liked(cls, liked: bool) -> "LikeState":
        return cls.LIKED if liked else cls.UNLIKED
