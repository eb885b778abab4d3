"""Store interface for posts."""
from typing import Protocol

from .entities import NewPost, Pagination, Post, PostPatch


class IPostRepository(Protocol):
    async def create(self, new_post: NewPost) -> Post:
        """Persist a post. Raises NotFoundError("author") if the author row is gone."""
        ...

    async def get_by_id(self, post_id: int) -> Post | None: ...

    async def update_owned(self, post_id: int, owner_id: int, patch: PostPatch) -> Post | None:
        """Atomic ``UPDATE ... WHERE id = ? AND author_id = ?``. None when no row matched."""
        ...

    async def delete_owned(self, post_id: int, owner_id: int) -> bool:
        """Atomic ``DELETE ... WHERE id = ? AND author_id = ?``. False when no row matched."""
        ...

    async def list_page(self, pagination: Pagination) -> list[Post]:
        """Newest first: ``created_at DESC, id DESC``."""
        ...

    async def count(self) -> int: ...
