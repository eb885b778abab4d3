"""Client library over both transports, wired to the real adapters."""
import grpc
import httpx
import pytest

from inkwell.client import (
    BlogClient,
    GrpcTransport,
    HttpTransport,
    InvalidRequestError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
)
from inkwell.client.grpc_client import list_response_from_page, map_status
from inkwell.client.token_store import TokenStore
from inkwell.interfaces.grpc import messages
from inkwell.interfaces.grpc.server import build_handler
from inkwell.interfaces.grpc.service import BlogServicer
from inkwell.main import create_app


@pytest.fixture(params=["http", "grpc"])
async def blog_client(request, settings, facade):
    if request.param == "http":
        app = create_app(settings, facade)
        transport = HttpTransport(
            "http://testserver",
            client=httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver"),
        )
        async with BlogClient(transport) as client:
            yield client
        return

    server = grpc.aio.server()
    server.add_generic_rpc_handlers((build_handler(BlogServicer(facade, timeout_secs=5)),))
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()
    try:
        async with BlogClient(GrpcTransport(f"127.0.0.1:{port}")) as client:
            yield client
    finally:
        await server.stop(grace=None)


async def test_scenario_over_each_transport(blog_client):
    auth = await blog_client.register("alice", "alice@example.com", "password123")
    assert blog_client.get_token() == auth.access_token

    post = await blog_client.create_post("Hello", "World")
    assert (await blog_client.get_post(post.id)) == post

    updated = await blog_client.update_post(post.id, "Hello 2", "World 2")
    assert updated.title == "Hello 2"

    for i in range(3):
        await blog_client.create_post(f"extra {i}", "C")
    page = await blog_client.list_posts(limit=2, offset=2)
    assert (page.limit, page.offset, page.total) == (2, 2, 4)
    assert [p.title for p in page.posts] == ["extra 0", "Hello 2"]

    await blog_client.delete_post(post.id)
    with pytest.raises(NotFoundError):
        await blog_client.get_post(post.id)


async def test_error_mapping_over_each_transport(blog_client):
    await blog_client.register("alice", "alice@example.com", "password123")
    with pytest.raises(InvalidRequestError, match="already exists"):
        await blog_client.register("alice", "other@example.com", "password123")
    with pytest.raises(UnauthorizedError):
        await blog_client.login("alice", "wrong-password")

    post = await blog_client.create_post("Mine", "C")
    await blog_client.register("bob", "bob@example.com", "password123")
    with pytest.raises(UnauthorizedError):
        await blog_client.delete_post(post.id)


async def test_protected_calls_without_token_fail_locally():
    class Unreachable:
        async def create_post(self, *args):
            raise AssertionError("transport must not be called")

        update_post = delete_post = create_post

        async def close(self):
            pass

    client = BlogClient(Unreachable())
    with pytest.raises(UnauthorizedError):
        await client.create_post("T", "C")
    with pytest.raises(UnauthorizedError):
        await client.update_post(1, "T", "C")
    with pytest.raises(UnauthorizedError):
        await client.delete_post(1)


def test_token_management():
    client = BlogClient(transport=None, token="abc")
    assert client.get_token() == "abc"
    client.clear_token()
    assert client.get_token() is None
    client.set_token("def")
    assert client.get_token() == "def"


@pytest.mark.parametrize(
    ("code", "error"),
    [
        (grpc.StatusCode.UNAUTHENTICATED, UnauthorizedError),
        (grpc.StatusCode.PERMISSION_DENIED, UnauthorizedError),
        (grpc.StatusCode.NOT_FOUND, NotFoundError),
        (grpc.StatusCode.INVALID_ARGUMENT, InvalidRequestError),
        (grpc.StatusCode.ALREADY_EXISTS, InvalidRequestError),
        (grpc.StatusCode.FAILED_PRECONDITION, InvalidRequestError),
        (grpc.StatusCode.INTERNAL, TransportError),
        (grpc.StatusCode.UNAVAILABLE, TransportError),
    ],
)
def test_grpc_status_mapping(code, error):
    assert isinstance(map_status(code, "details"), error)


@pytest.mark.parametrize(
    ("status", "error"),
    [
        (401, UnauthorizedError),
        (403, UnauthorizedError),
        (404, NotFoundError),
        (400, InvalidRequestError),
        (409, InvalidRequestError),
        (413, InvalidRequestError),
        (500, TransportError),
        (503, TransportError),
    ],
)
def test_http_status_mapping(status, error):
    from inkwell.client.http_client import map_status as map_http_status

    response = httpx.Response(status, json={"error": "boom"})
    mapped = map_http_status(response)
    assert isinstance(mapped, error)
    assert "boom" in str(mapped)


def test_list_response_from_page_derives_offset():
    reply = messages.ListPostsResponse(posts=[], page=3, page_size=20, total=100)
    page = list_response_from_page(reply)
    assert (page.limit, page.offset, page.total) == (20, 40, 100)


def test_token_store_trims_and_discards_blank(tmp_path):
    store = TokenStore(tmp_path / ".blog_token")
    assert store.load() is None
    store.save("  abc.def.ghi \n")
    assert store.load() == "abc.def.ghi"
    (tmp_path / ".blog_token").write_text("   \n")
    assert store.load() is None
    store.clear()
    store.clear()
    assert store.load() is None
