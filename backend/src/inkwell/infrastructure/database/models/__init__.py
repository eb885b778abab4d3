from .identity import UserModel
from .blog import PostModel

__all__ = [
    "UserModel",
    "PostModel",
]
