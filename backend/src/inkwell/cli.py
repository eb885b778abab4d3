"""Command-line front-end for the blog service, over HTTP or gRPC."""
from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click

from inkwell.client import (
    AuthResponse,
    BlogClient,
    BlogClientError,
    GrpcTransport,
    HttpTransport,
    InvalidRequestError,
    ListPostsResponse,
    NotFoundError,
    Post,
    UnauthorizedError,
)
from inkwell.application.blog.pagination import MAX_LIMIT
from inkwell.client.token_store import TokenStore

DEFAULT_HTTP_SERVER = "http://127.0.0.1:8080"
DEFAULT_GRPC_SERVER = "http://127.0.0.1:50051"

T = TypeVar("T")


def normalize_http_server(server: str) -> str:
    if server.startswith(("http://", "https://")):
        return server
    return f"http://{server}"


def normalize_grpc_target(server: str) -> str:
    for scheme in ("http://", "https://"):
        if server.startswith(scheme):
            return server[len(scheme):]
    return server


def build_client(use_grpc: bool, server: str | None, token: str | None) -> BlogClient:
    if use_grpc:
        transport = GrpcTransport(normalize_grpc_target(server or DEFAULT_GRPC_SERVER))
    else:
        transport = HttpTransport(normalize_http_server(server or DEFAULT_HTTP_SERVER))
    return BlogClient(transport, token=token)


def describe_error(exc: BlogClientError) -> str:
    if isinstance(exc, UnauthorizedError):
        return f"authorization required ({exc}): run `inkwell login ...` or `inkwell register ...`"
    if isinstance(exc, NotFoundError):
        return f"not found: {exc}"
    if isinstance(exc, InvalidRequestError):
        return f"invalid request: {exc}"
    return f"transport error: {exc}"


def _run(ctx: click.Context, op: Callable[[BlogClient], Awaitable[T]]) -> T:
    """Build a client from the global options, run ``op`` and close the client."""
    obj = ctx.obj
    token = obj["token_store"].load()

    async def _main() -> T:
        # grpc.aio channels bind to the running loop, so build inside it
        client: BlogClient = obj["client_factory"](obj["grpc"], obj["server"], token)
        async with client:
            return await op(client)

    try:
        return asyncio.run(_main())
    except BlogClientError as exc:
        raise click.ClickException(describe_error(exc)) from exc


def _echo_auth(title: str, auth: AuthResponse) -> None:
    click.echo(title)
    click.echo(f"token: {auth.access_token}")
    click.echo("user:")
    click.echo(f"  id: {auth.user.id}")
    click.echo(f"  username: {auth.user.username}")
    click.echo(f"  email: {auth.user.email}")
    click.echo(f"  created_at: {auth.user.created_at.isoformat()}")


def _echo_post(title: str, post: Post) -> None:
    click.echo(title)
    click.echo(f"id: {post.id}")
    click.echo(f"title: {post.title}")
    click.echo(f"content: {post.content}")
    click.echo(f"author_id: {post.author_id}")
    click.echo(f"created_at: {post.created_at.isoformat()}")
    click.echo(f"updated_at: {post.updated_at.isoformat()}")


def _echo_list(page: ListPostsResponse) -> None:
    click.echo(
        f"Posts: {len(page.posts)} (limit={page.limit}, offset={page.offset}, total={page.total})"
    )
    for post in page.posts:
        click.echo(f"- [{post.id}] {post.title} (author_id={post.author_id}, updated_at={post.updated_at.isoformat()})")


@click.group("inkwell")
@click.option("--grpc", "use_grpc", is_flag=True, help="Use the gRPC transport (default: HTTP).")
@click.option("--server", default=None, help="Server address for the selected transport.")
@click.pass_context
def cli(ctx: click.Context, use_grpc: bool, server: str | None) -> None:
    """Blog service client."""
    ctx.ensure_object(dict)
    ctx.obj["grpc"] = use_grpc
    ctx.obj["server"] = server
    ctx.obj.setdefault("token_store", TokenStore())
    ctx.obj.setdefault("client_factory", build_client)


@cli.command("register")
@click.option("--username", required=True)
@click.option("--email", required=True)
@click.option("--password", required=True)
@click.pass_context
def register_command(ctx: click.Context, username: str, email: str, password: str) -> None:
    """Create an account and remember its token."""
    auth = _run(ctx, lambda client: client.register(username, email, password))
    ctx.obj["token_store"].save(auth.access_token)
    _echo_auth("Registered", auth)


@cli.command("login")
@click.option("--username", required=True)
@click.option("--password", required=True)
@click.pass_context
def login_command(ctx: click.Context, username: str, password: str) -> None:
    """Log in and remember the token."""
    auth = _run(ctx, lambda client: client.login(username, password))
    ctx.obj["token_store"].save(auth.access_token)
    _echo_auth("Logged in", auth)


@cli.command("create")
@click.option("--title", required=True)
@click.option("--content", required=True)
@click.pass_context
def create_command(ctx: click.Context, title: str, content: str) -> None:
    """Create a post (requires login)."""
    post = _run(ctx, lambda client: client.create_post(title, content))
    _echo_post("Post created", post)


@cli.command("get")
@click.option("--id", "post_id", type=int, required=True)
@click.pass_context
def get_command(ctx: click.Context, post_id: int) -> None:
    post = _run(ctx, lambda client: client.get_post(post_id))
    _echo_post("Post", post)


@cli.command("update")
@click.option("--id", "post_id", type=int, required=True)
@click.option("--title", required=True)
@click.option("--content", default=None, help="New content; the current content is kept if omitted.")
@click.pass_context
def update_command(ctx: click.Context, post_id: int, title: str, content: str | None) -> None:
    """Update a post (requires login)."""

    async def op(client: BlogClient) -> Post:
        body = content
        if body is None:
            body = (await client.get_post(post_id)).content
        return await client.update_post(post_id, title, body)

    post = _run(ctx, op)
    _echo_post("Post updated", post)


@cli.command("delete")
@click.option("--id", "post_id", type=int, required=True)
@click.pass_context
def delete_command(ctx: click.Context, post_id: int) -> None:
    """Delete a post (requires login)."""
    _run(ctx, lambda client: client.delete_post(post_id))
    click.echo(f"Post deleted: id={post_id}")


@cli.command("list")
@click.option("--limit", type=click.IntRange(min=1, max=MAX_LIMIT), default=10, show_default=True)
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True)
@click.pass_context
def list_command(ctx: click.Context, limit: int, offset: int) -> None:
    page = _run(ctx, lambda client: client.list_posts(limit, offset))
    _echo_list(page)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
