"""BlogClient: one API over either transport, holding the caller's token."""
from typing import Protocol

from .errors import UnauthorizedError
from .models import AuthResponse, ListPostsResponse, Post


class Transport(Protocol):
    async def register(self, username: str, email: str, password: str) -> AuthResponse: ...
    async def login(self, username: str, password: str) -> AuthResponse: ...
    async def create_post(self, token: str, title: str, content: str) -> Post: ...
    async def get_post(self, post_id: int) -> Post: ...
    async def update_post(self, token: str, post_id: int, title: str, content: str) -> Post: ...
    async def delete_post(self, token: str, post_id: int) -> None: ...
    async def list_posts(self, limit: int, offset: int) -> ListPostsResponse: ...
    async def close(self) -> None: ...


class BlogClient:
    """``register`` and ``login`` remember the returned token; protected calls need one."""

    def __init__(self, transport: Transport, token: str | None = None) -> None:
        self._transport = transport
        self._token = token

    async def __aenter__(self) -> "BlogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._transport.close()

    def set_token(self, token: str) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token

    def clear_token(self) -> None:
        self._token = None

    def _require_token(self) -> str:
        if not self._token:
            raise UnauthorizedError("no token: log in first")
        return self._token

    async def register(self, username: str, email: str, password: str) -> AuthResponse:
        result = await self._transport.register(username, email, password)
        self._token = result.access_token
        return result

    async def login(self, username: str, password: str) -> AuthResponse:
        result = await self._transport.login(username, password)
        self._token = result.access_token
        return result

    async def create_post(self, title: str, content: str) -> Post:
        return await self._transport.create_post(self._require_token(), title, content)

    async def get_post(self, post_id: int) -> Post:
        return await self._transport.get_post(post_id)

    async def update_post(self, post_id: int, title: str, content: str) -> Post:
        return await self._transport.update_post(self._require_token(), post_id, title, content)

    async def delete_post(self, post_id: int) -> None:
        await self._transport.delete_post(self._require_token(), post_id)

    async def list_posts(self, limit: int = 20, offset: int = 0) -> ListPostsResponse:
        return await self._transport.list_posts(limit, offset)
