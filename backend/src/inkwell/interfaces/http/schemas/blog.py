"""Pydantic v2 schemas for post endpoints."""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from inkwell.application.blog.queries import ListPostsResult
from inkwell.domain.blog.entities import Post
from inkwell.domain.blog.value_objects import TITLE_MAX_LEN


class PostWrite(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LEN)
    content: str = Field(min_length=1)

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author_id=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostListResponse(BaseModel):
    posts: list[PostResponse]
    limit: int
    offset: int
    total: int

    @classmethod
    def from_result(cls, result: ListPostsResult) -> "PostListResponse":
        return cls(
            posts=[PostResponse.from_post(p) for p in result.posts],
            limit=result.limit,
            offset=result.offset,
            total=result.total,
        )
