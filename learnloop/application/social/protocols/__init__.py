from .like_repository import LikeRepositoryProtocol
from .post_repository import PostRepositoryProtocol

__all__ = ["LikeRepositoryProtocol", "PostRepositoryProtocol"]
