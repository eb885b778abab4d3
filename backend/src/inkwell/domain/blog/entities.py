"""Domain entities for the Blog bounded context."""
from dataclasses import dataclass
from datetime import datetime

from inkwell.domain.errors import ValidationError

from .value_objects import Content, Title, require_positive


@dataclass(frozen=True)
class Post:
    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        id: int,
        title: str,
        content: str,
        author_id: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Post":
        require_positive("id", id)
        require_positive("author_id", author_id)
        if updated_at < created_at:
            raise ValidationError("updated_at", "must be >= created_at")
        return cls(
            id=id,
            title=str(Title(title)),
            content=str(Content(content)),
            author_id=author_id,
            created_at=created_at,
            updated_at=updated_at,
        )

    def is_owned_by(self, user_id: int) -> bool:
        return self.author_id == user_id


@dataclass(frozen=True)
class NewPost:
    title: Title
    content: Content
    author_id: int


@dataclass(frozen=True)
class PostPatch:
    title: Title
    content: Content


@dataclass(frozen=True)
class Pagination:
    """Store-facing window. ``page`` is 1-based."""
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
