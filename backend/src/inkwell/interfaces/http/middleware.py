"""Pure ASGI middleware for the REST listener.

Stacked by ``install_middleware`` (outermost first): request logging, body-size
cap, concurrency cap, per-request timeout.
"""
from __future__ import annotations

import asyncio
import json
import time
import uuid

from fastapi import FastAPI
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from inkwell.infrastructure.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "x-request-id"


async def _send_error(send: Send, status_code: int, message: str) -> None:
    body = json.dumps({"error": message}).encode()
    await send(
        {
            "type": "http.response.start",
            "status": status_code,
            "headers": [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body})


class RequestLoggingMiddleware:
    """Bind a correlation id for the request and log ``METHOD path -> status``."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name == REQUEST_ID_HEADER.encode():
                request_id = value.decode("latin-1").strip()
                break
        request_id = request_id or uuid.uuid4().hex
        set_correlation_id(request_id)

        status_code = 500
        started = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER.encode(), request_id.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{scope['method']} {scope['path']} -> {status_code} in {elapsed_ms:.1f}ms")
            clear_correlation_id()


class BodyLimitMiddleware:
    """Reject request bodies larger than ``max_bytes`` with 413."""

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        for name, value in scope.get("headers", []):
            if name == b"content-length":
                try:
                    declared = int(value)
                except ValueError:
                    await _send_error(send, 400, "invalid content-length")
                    return
                if declared > self.max_bytes:
                    await _send_error(send, 413, "payload too large")
                    return
                break

        # Chunked bodies carry no length header: buffer up to the cap, then replay.
        chunks: list[bytes] = []
        received = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_bytes:
                await _send_error(send, 413, "payload too large")
                return
            chunks.append(chunk)
            if not message.get("more_body", False):
                break

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)


class ConcurrencyLimitMiddleware:
    """At most ``limit`` requests in flight; the rest wait their turn."""

    def __init__(self, app: ASGIApp, limit: int) -> None:
        self.app = app
        self._semaphore = asyncio.Semaphore(limit)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        async with self._semaphore:
            await self.app(scope, receive, send)


class TimeoutMiddleware:
    """Answer 408 when a request takes longer than ``timeout`` seconds."""

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Request timed out after {self.timeout}s: {scope['method']} {scope['path']}")
            if not response_started:
                await _send_error(send, 408, "request timeout")


def install_middleware(
    app: FastAPI,
    *,
    body_limit_bytes: int,
    concurrency_limit: int,
    timeout_secs: float,
) -> None:
    # add_middleware wraps the current stack, so the last one added runs first
    app.add_middleware(TimeoutMiddleware, timeout=timeout_secs)
    app.add_middleware(ConcurrencyLimitMiddleware, limit=concurrency_limit)
    app.add_middleware(BodyLimitMiddleware, max_bytes=body_limit_bytes)
    app.add_middleware(RequestLoggingMiddleware)
