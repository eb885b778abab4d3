"""Client-side views of server payloads."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore")


class User(_Model):
    id: int
    username: str
    email: str
    created_at: datetime


class Post(_Model):
    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime


class AuthResponse(_Model):
    access_token: str
    user: User


class ListPostsResponse(_Model):
    posts: list[Post]
    limit: int
    offset: int
    total: int
