from .like import LikeState
from .post import MAX_POST_CONTENT_LENGTH, Post

__all__ = ["MAX_POST_CONTENT_LENGTH", "LikeState", "Post"]
