"""DTOs for social use cases."""

from dataclasses import dataclass

from learnloop.domain.social.entities.like import LikeState


@dataclass(frozen=True)
class LikeToggleResult:
    """State of a (post, user) pair after a toggle, with the post's like count."""

    post_id: int
    user_id: str
    state: LikeState
    like_count: int

    @property
    def liked(self) -> bool:
        return self.state.liked
