"""RPC servicer called directly with a stand-in ServicerContext."""
import asyncio
import json

import grpc
import pytest

from inkwell.interfaces.grpc.server import METHODS, build_handler
from inkwell.interfaces.grpc.service import BlogServicer


class Aborted(Exception):
    def __init__(self, code: grpc.StatusCode, details: str) -> None:
        super().__init__(f"{code.name}: {details}")
        self.code = code
        self.details = details


class FakeContext:
    def __init__(self, token: str | None = None) -> None:
        self._metadata = (("authorization", f"Bearer {token}"),) if token else ()

    def invocation_metadata(self):
        return self._metadata

    async def abort(self, code, details=""):
        raise Aborted(code, details)


def _payload(**fields) -> bytes:
    return json.dumps(fields).encode()


@pytest.fixture
def servicer(facade) -> BlogServicer:
    return BlogServicer(facade, timeout_secs=5)


async def _call(servicer, method, token=None, **fields):
    reply = await getattr(servicer, method)(_payload(**fields), FakeContext(token))
    return json.loads(reply)


async def _abort_code(servicer, method, token=None, payload=None, **fields):
    body = payload if payload is not None else _payload(**fields)
    with pytest.raises(Aborted) as exc_info:
        await getattr(servicer, method)(body, FakeContext(token))
    return exc_info.value


async def _register(servicer, username="alice", email="alice@example.com"):
    return await _call(servicer, "Register", username=username, email=email, password="password123")


async def test_register_and_login(servicer):
    registered = await _register(servicer)
    assert registered["user"]["username"] == "alice"
    logged_in = await _call(servicer, "Login", username="alice", password="password123")
    assert logged_in["user"]["id"] == registered["user"]["id"]
    assert logged_in["access_token"]


async def test_duplicate_register_is_already_exists(servicer):
    await _register(servicer)
    aborted = await _abort_code(
        servicer, "Register", username="alice", email="x@example.com", password="password123"
    )
    assert aborted.code == grpc.StatusCode.ALREADY_EXISTS
    assert aborted.details == "resource already exists: username"


async def test_bad_login_is_unauthenticated(servicer):
    aborted = await _abort_code(servicer, "Login", username="ghost", password="password123")
    assert aborted.code == grpc.StatusCode.UNAUTHENTICATED
    assert aborted.details == "invalid credentials"


async def test_validation_is_invalid_argument(servicer):
    aborted = await _abort_code(
        servicer, "Register", username="al", email="alice@example.com", password="password123"
    )
    assert aborted.code == grpc.StatusCode.INVALID_ARGUMENT


async def test_malformed_payload_is_invalid_argument(servicer):
    aborted = await _abort_code(servicer, "GetPost", payload=b"{not json")
    assert aborted.code == grpc.StatusCode.INVALID_ARGUMENT
    aborted = await _abort_code(servicer, "GetPost", payload=b'{"id": "seven"}')
    assert aborted.code == grpc.StatusCode.INVALID_ARGUMENT


@pytest.mark.parametrize("token", [None, "garbage"])
async def test_protected_methods_need_a_token(servicer, token):
    for method in ("CreatePost", "UpdatePost", "DeletePost"):
        aborted = await _abort_code(servicer, method, token=token, id=1, title="T", content="C")
        assert aborted.code == grpc.StatusCode.UNAUTHENTICATED


async def test_post_lifecycle_and_ownership(servicer):
    alice = (await _register(servicer))["access_token"]
    bob = (await _register(servicer, "bob", "bob@example.com"))["access_token"]

    post = await _call(servicer, "CreatePost", alice, title="Hello", content="World")
    assert await _call(servicer, "GetPost", id=post["id"]) == post

    aborted = await _abort_code(servicer, "UpdatePost", bob, id=post["id"], title="X", content="Y")
    assert aborted.code == grpc.StatusCode.PERMISSION_DENIED
    aborted = await _abort_code(servicer, "DeletePost", bob, id=post["id"])
    assert aborted.code == grpc.StatusCode.PERMISSION_DENIED

    updated = await _call(servicer, "UpdatePost", alice, id=post["id"], title="Hello 2", content="World 2")
    assert updated["title"] == "Hello 2"

    assert await _call(servicer, "DeletePost", alice, id=post["id"]) == {}
    aborted = await _abort_code(servicer, "GetPost", id=post["id"])
    assert aborted.code == grpc.StatusCode.NOT_FOUND


async def test_list_posts_pages(servicer):
    alice = (await _register(servicer))["access_token"]
    for i in range(3):
        await _call(servicer, "CreatePost", alice, title=f"post {i}", content="C")

    default = await _call(servicer, "ListPosts")
    assert (default["page"], default["page_size"], default["total"]) == (1, 20, 3)

    second = await _call(servicer, "ListPosts", page=2, page_size=2)
    assert (second["page"], second["page_size"]) == (2, 2)
    assert [p["title"] for p in second["posts"]] == ["post 0"]


async def test_list_posts_page_size_cap(servicer):
    aborted = await _abort_code(servicer, "ListPosts", page=1, page_size=101)
    assert aborted.code == grpc.StatusCode.INVALID_ARGUMENT


async def test_list_posts_page_past_bigint_is_invalid_argument(servicer):
    aborted = await _abort_code(servicer, "ListPosts", page=10**19, page_size=20)
    assert aborted.code == grpc.StatusCode.INVALID_ARGUMENT


async def test_get_post_id_past_bigint_is_not_found(servicer):
    aborted = await _abort_code(servicer, "GetPost", id=10**20)
    assert aborted.code == grpc.StatusCode.NOT_FOUND


async def test_unexpected_errors_are_opaque(servicer, facade):
    from inkwell.domain.errors import UnexpectedError

    async def broken(post_id):
        raise UnexpectedError("connection reset by peer")

    facade.get_post = broken
    aborted = await _abort_code(servicer, "GetPost", id=1)
    assert aborted.code == grpc.StatusCode.INTERNAL
    assert aborted.details == "internal error"


async def test_slow_call_is_deadline_exceeded(facade):
    async def slow(post_id):
        await asyncio.sleep(1)

    facade.get_post = slow
    servicer = BlogServicer(facade, timeout_secs=0.01)
    aborted = await _abort_code(servicer, "GetPost", id=1)
    assert aborted.code == grpc.StatusCode.DEADLINE_EXCEEDED


def test_handler_registers_every_method(servicer):
    handler = build_handler(servicer)
    for method in METHODS:
        details = type("Details", (), {"method": f"/blog.BlogService/{method}"})()
        assert handler.service(details) is not None
