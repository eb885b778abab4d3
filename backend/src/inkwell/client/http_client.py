"""REST transport on httpx."""
from typing import Any

import httpx

from .errors import (
    BlogClientError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
)
from .models import AuthResponse, ListPostsResponse, Post


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text


def map_status(response: httpx.Response) -> BlogClientError:
    message = _error_message(response)
    code = response.status_code
    if code in (401, 403):
        return UnauthorizedError(message)
    if code == 404:
        return NotFoundError(message)
    if 400 <= code < 500:
        return InvalidRequestError(message)
    return TransportError(f"server returned {code}: {message}")


class HttpTransport:
    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.AsyncClient | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self._client.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        if response.is_error:
            raise map_status(response)
        return response

    async def register(self, username: str, email: str, password: str) -> AuthResponse:
        response = await self._request(
            "POST",
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        return AuthResponse.model_validate(response.json())

    async def login(self, username: str, password: str) -> AuthResponse:
        response = await self._request(
            "POST", "/api/auth/login", json={"username": username, "password": password}
        )
        return AuthResponse.model_validate(response.json())

    async def create_post(self, token: str, title: str, content: str) -> Post:
        response = await self._request(
            "POST", "/api/posts", token=token, json={"title": title, "content": content}
        )
        return Post.model_validate(response.json())

    async def get_post(self, post_id: int) -> Post:
        response = await self._request("GET", f"/api/posts/{post_id}")
        return Post.model_validate(response.json())

    async def update_post(self, token: str, post_id: int, title: str, content: str) -> Post:
        response = await self._request(
            "PUT", f"/api/posts/{post_id}", token=token, json={"title": title, "content": content}
        )
        return Post.model_validate(response.json())

    async def delete_post(self, token: str, post_id: int) -> None:
        await self._request("DELETE", f"/api/posts/{post_id}", token=token)

    async def list_posts(self, limit: int, offset: int) -> ListPostsResponse:
        response = await self._request("GET", "/api/posts", params={"limit": limit, "offset": offset})
        return ListPostsResponse.model_validate(response.json())
