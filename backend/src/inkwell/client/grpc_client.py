"""RPC transport on a grpc.aio channel, using the server's JSON codec."""
from typing import Any, Callable, TypeVar

import grpc
from pydantic import BaseModel

from inkwell.application.blog.pagination import to_pagination
from inkwell.interfaces.grpc import messages
from inkwell.interfaces.grpc.codec import deserializer, method_path, serializer

from .errors import (
    BlogClientError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
)
from .models import AuthResponse, ListPostsResponse, Post

R = TypeVar("R", bound=BaseModel)

_UNAUTHORIZED = {grpc.StatusCode.UNAUTHENTICATED, grpc.StatusCode.PERMISSION_DENIED}
_INVALID = {
    grpc.StatusCode.INVALID_ARGUMENT,
    grpc.StatusCode.ALREADY_EXISTS,
    grpc.StatusCode.FAILED_PRECONDITION,
}


def map_status(code: grpc.StatusCode, details: str | None) -> BlogClientError:
    message = details or code.name.lower()
    if code in _UNAUTHORIZED:
        return UnauthorizedError(message)
    if code == grpc.StatusCode.NOT_FOUND:
        return NotFoundError(message)
    if code in _INVALID:
        return InvalidRequestError(message)
    return TransportError(f"rpc failed with {code.name}: {message}")


def list_response_from_page(reply: messages.ListPostsResponse) -> ListPostsResponse:
    return ListPostsResponse(
        posts=[Post.model_validate(p.model_dump()) for p in reply.posts],
        limit=reply.page_size,
        offset=max(reply.page - 1, 0) * reply.page_size,
        total=reply.total,
    )


class GrpcTransport:
    def __init__(self, target: str, timeout: float = 10.0, channel: grpc.aio.Channel | None = None) -> None:
        self.target = target
        self.timeout = timeout
        self._channel = channel or grpc.aio.insecure_channel(target)

    async def close(self) -> None:
        await self._channel.close()

    async def _call(
        self,
        method: str,
        request: BaseModel,
        response_type: type[R],
        token: str | None = None,
    ) -> R:
        rpc: Callable[..., Any] = self._channel.unary_unary(
            method_path(method),
            request_serializer=serializer,
            response_deserializer=deserializer(response_type),
        )
        metadata = (("authorization", f"Bearer {token}"),) if token else None
        try:
            return await rpc(request, metadata=metadata, timeout=self.timeout)
        except grpc.aio.AioRpcError as exc:
            raise map_status(exc.code(), exc.details()) from exc

    async def register(self, username: str, email: str, password: str) -> AuthResponse:
        return await self._call(
            "Register",
            messages.RegisterRequest(username=username, email=email, password=password),
            AuthResponse,
        )

    async def login(self, username: str, password: str) -> AuthResponse:
        return await self._call(
            "Login", messages.LoginRequest(username=username, password=password), AuthResponse
        )

    async def create_post(self, token: str, title: str, content: str) -> Post:
        return await self._call(
            "CreatePost", messages.CreatePostRequest(title=title, content=content), Post, token
        )

    async def get_post(self, post_id: int) -> Post:
        return await self._call("GetPost", messages.GetPostRequest(id=post_id), Post)

    async def update_post(self, token: str, post_id: int, title: str, content: str) -> Post:
        return await self._call(
            "UpdatePost",
            messages.UpdatePostRequest(id=post_id, title=title, content=content),
            Post,
            token,
        )

    async def delete_post(self, token: str, post_id: int) -> None:
        await self._call("DeletePost", messages.DeletePostRequest(id=post_id), messages.Empty, token)

    async def list_posts(self, limit: int, offset: int) -> ListPostsResponse:
        pagination = to_pagination(limit, offset)
        reply = await self._call(
            "ListPosts",
            messages.ListPostsRequest(page=pagination.page, page_size=pagination.page_size),
            messages.ListPostsResponse,
        )
        return list_response_from_page(reply)
