"""Request/response messages for the ``blog.BlogService`` RPC service.

Carried as JSON bytes (see ``codec``). Field names follow the proto3 convention
of the service: unset integers arrive as ``0``.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from inkwell.application.blog.queries import ListPostsResult
from inkwell.domain.blog.entities import Post as PostEntity
from inkwell.domain.identity.entities import User as UserEntity


class _Message(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Empty(_Message):
    pass


class RegisterRequest(_Message):
    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(_Message):
    username: str = ""
    password: str = ""


class CreatePostRequest(_Message):
    title: str = ""
    content: str = ""


class GetPostRequest(_Message):
    id: int = 0


class UpdatePostRequest(_Message):
    id: int = 0
    title: str = ""
    content: str = ""


class DeletePostRequest(_Message):
    id: int = 0


class ListPostsRequest(_Message):
    page: int = 0
    page_size: int = 0


class User(_Message):
    id: int
    username: str
    email: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: UserEntity) -> "User":
        return cls(id=user.id, username=user.username, email=user.email, created_at=user.created_at)


class Post(_Message):
    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, post: PostEntity) -> "Post":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author_id=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class AuthResponse(_Message):
    access_token: str
    user: User


class ListPostsResponse(_Message):
    posts: list[Post]
    page: int
    page_size: int
    total: int

    @classmethod
    def from_result(cls, result: ListPostsResult) -> "ListPostsResponse":
        return cls(
            posts=[Post.from_entity(p) for p in result.posts],
            page=result.page,
            page_size=result.page_size,
            total=result.total,
        )
