"""``blog.BlogService`` servicer.

Every method takes the raw request bytes, decodes them into a message, runs the
use case through the shared facade under the per-call timeout, and encodes the
reply. Failures abort the call with the status from ``status.domain_error_status``.
"""
from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable

import grpc
from pydantic import BaseModel

from inkwell.application.blog.pagination import window_from_page
from inkwell.domain.errors import DomainError, UnexpectedError
from inkwell.infrastructure.logging import logger
from inkwell.interfaces.facade import BlogFacade

from . import messages
from .auth import UnauthenticatedError, authenticate
from .codec import MalformedMessageError, decode, serializer
from .status import INTERNAL_ERROR, domain_error_status


class BlogServicer:
    def __init__(self, facade: BlogFacade, timeout_secs: float) -> None:
        self._facade = facade
        self._timeout = timeout_secs

    async def _run(
        self,
        method: str,
        context: grpc.aio.ServicerContext,
        handler: Callable[[], Awaitable[BaseModel]],
    ) -> bytes:
        started = time.perf_counter()
        code = grpc.StatusCode.OK
        details = ""
        try:
            reply = await asyncio.wait_for(handler(), timeout=self._timeout)
        except MalformedMessageError:
            code, details = grpc.StatusCode.INVALID_ARGUMENT, "malformed request"
        except UnauthenticatedError:
            code, details = grpc.StatusCode.UNAUTHENTICATED, "unauthorized"
        except asyncio.TimeoutError:
            code, details = grpc.StatusCode.DEADLINE_EXCEEDED, "request timeout"
        except UnexpectedError as exc:
            logger.error(f"Unexpected error in {method}: {exc.detail}")
            code, details = grpc.StatusCode.INTERNAL, INTERNAL_ERROR
        except DomainError as exc:
            code, details = domain_error_status(exc)
        except Exception:
            logger.exception(f"Unhandled error in {method}")
            code, details = grpc.StatusCode.INTERNAL, INTERNAL_ERROR
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"rpc {method} -> {code.name} in {elapsed_ms:.1f}ms")

        if code is not grpc.StatusCode.OK:
            await context.abort(code, details)
        return serializer(reply)

    # ── Auth ──────────────────────────────────────────────────────────────────

    async def Register(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        async def handle() -> messages.AuthResponse:
            body = decode(messages.RegisterRequest, request)
            result = await self._facade.register(
                username=body.username, email=body.email, password=body.password
            )
            return messages.AuthResponse(
                access_token=result.access_token, user=messages.User.from_entity(result.user)
            )

        return await self._run("Register", context, handle)

    async def Login(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        async def handle() -> messages.AuthResponse:
            body = decode(messages.LoginRequest, request)
            result = await self._facade.login(username=body.username, password=body.password)
            return messages.AuthResponse(
                access_token=result.access_token, user=messages.User.from_entity(result.user)
            )

        return await self._run("Login", context, handle)

    # ── Posts ─────────────────────────────────────────────────────────────────

    async def CreatePost(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        async def handle() -> messages.Post:
            claims = authenticate(context, self._facade)
            body = decode(messages.CreatePostRequest, request)
            post = await self._facade.create_post(
                claims.user_id, title=body.title, content=body.content
            )
            return messages.Post.from_entity(post)

        return await self._run("CreatePost", context, handle)

    async def GetPost(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        async def handle() -> messages.Post:
            body = decode(messages.GetPostRequest, request)
            post = await self._facade.get_post(body.id)
            return messages.Post.from_entity(post)

        return await self._run("GetPost", context, handle)

    async def UpdatePost(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        async def handle() -> messages.Post:
            claims = authenticate(context, self._facade)
            body = decode(messages.UpdatePostRequest, request)
            post = await self._facade.update_post(
                claims.user_id, body.id, title=body.title, content=body.content
            )
            return messages.Post.from_entity(post)

        return await self._run("UpdatePost", context, handle)

    async def DeletePost(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        async def handle() -> messages.Empty:
            claims = authenticate(context, self._facade)
            body = decode(messages.DeletePostRequest, request)
            await self._facade.delete_post(claims.user_id, body.id)
            return messages.Empty()

        return await self._run("DeletePost", context, handle)

    async def ListPosts(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        async def handle() -> messages.ListPostsResponse:
            body = decode(messages.ListPostsRequest, request)
            limit, offset = window_from_page(body.page, body.page_size)
            result = await self._facade.list_posts(limit, offset)
            return messages.ListPostsResponse.from_result(result)

        return await self._run("ListPosts", context, handle)
