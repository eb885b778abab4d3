"""BlogFacade: the single entry point to the application layer.

Both transports (REST and RPC) hold the same long-lived facade instance. It carries
no request state: repositories check out a pooled session per operation.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from inkwell.application.blog import commands as blog_commands
from inkwell.application.blog import queries as blog_queries
from inkwell.application.identity import commands as id_commands
from inkwell.application.identity import queries as id_queries
from inkwell.domain.blog.entities import Post
from inkwell.domain.blog.repositories import IPostRepository
from inkwell.domain.identity.entities import User
from inkwell.domain.identity.repositories import IUserRepository
from inkwell.infrastructure.auth.jwt import TokenClaims, TokenService

if TYPE_CHECKING:
    from inkwell.application.blog.queries import ListPostsResult
    from inkwell.application.identity.commands import AuthResult


class BlogFacade:
    """Aggregates all application use cases."""

    def __init__(
        self,
        user_repo: IUserRepository,
        post_repo: IPostRepository,
        tokens: TokenService,
    ) -> None:
        self._user_repo = user_repo
        self._post_repo = post_repo
        self._tokens = tokens

    # ── Identity ──────────────────────────────────────────────────────────────

    async def register(self, username: str, email: str, password: str) -> "AuthResult":
        return await id_commands.register_user(
            username=username, email=email, password=password,
            user_repo=self._user_repo, tokens=self._tokens,
        )

    async def login(self, username: str, password: str) -> "AuthResult":
        return await id_commands.login_user(
            username=username, password=password,
            user_repo=self._user_repo, tokens=self._tokens,
        )

    def authenticate(self, token: str) -> TokenClaims:
        """Verify a bearer token. Raises InvalidTokenError on any failure."""
        return self._tokens.verify(token)

    async def get_current_user(self, user_id: int) -> User | None:
        return await id_queries.get_user_by_id(user_id, self._user_repo)

    # ── Posts ─────────────────────────────────────────────────────────────────

    async def create_post(self, author_id: int, title: str, content: str) -> Post:
        return await blog_commands.create_post(
            author_id=author_id, title=title, content=content, repo=self._post_repo,
        )

    async def get_post(self, post_id: int) -> Post:
        return await blog_queries.get_post(post_id, self._post_repo)

    async def update_post(self, actor_id: int, post_id: int, title: str, content: str) -> Post:
        return await blog_commands.update_post(
            actor_id=actor_id, post_id=post_id, title=title, content=content,
            repo=self._post_repo,
        )

    async def delete_post(self, actor_id: int, post_id: int) -> None:
        await blog_commands.delete_post(actor_id=actor_id, post_id=post_id, repo=self._post_repo)

    async def list_posts(self, limit: int, offset: int) -> "ListPostsResult":
        return await blog_queries.list_posts(limit=limit, offset=offset, repo=self._post_repo)
