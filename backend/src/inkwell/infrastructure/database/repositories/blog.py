"""Concrete SQLAlchemy repository for the blog context."""
from datetime import datetime, timezone

from sqlalchemy import delete, func as sqlfunc, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inkwell.domain.blog.entities import NewPost, Pagination, Post, PostPatch
from inkwell.domain.errors import DomainError, NotFoundError, UnexpectedError
from inkwell.infrastructure.database.connection import session_scope
from inkwell.infrastructure.database.models.blog import PostModel

from ._errors import is_foreign_key_violation
from .identity import _as_utc


class PostRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._factory = session_factory

    async def create(self, new_post: NewPost) -> Post:
        now = datetime.now(timezone.utc)
        try:
            async with session_scope(self._factory) as s:
                model = PostModel(
                    title=str(new_post.title),
                    content=str(new_post.content),
                    author_id=new_post.author_id,
                    created_at=now,
                    updated_at=now,
                )
                s.add(model)
                await s.flush()
                return _to_post(model)
        except IntegrityError as exc:
            if is_foreign_key_violation(exc):
                raise NotFoundError("author") from exc
            raise UnexpectedError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc

    async def get_by_id(self, post_id: int) -> Post | None:
        try:
            async with session_scope(self._factory) as s:
                row = await s.get(PostModel, post_id)
                return _to_post(row) if row else None
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc

    async def update_owned(self, post_id: int, owner_id: int, patch: PostPatch) -> Post | None:
        stmt = (
            update(PostModel)
            .where(PostModel.id == post_id, PostModel.author_id == owner_id)
            .values(
                title=str(patch.title),
                content=str(patch.content),
                updated_at=datetime.now(timezone.utc),
            )
            .returning(PostModel)
            .execution_options(synchronize_session=False)
        )
        try:
            async with session_scope(self._factory) as s:
                row = (await s.execute(stmt)).scalar_one_or_none()
                return _to_post(row) if row else None
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc

    async def delete_owned(self, post_id: int, owner_id: int) -> bool:
        stmt = delete(PostModel).where(PostModel.id == post_id, PostModel.author_id == owner_id)
        try:
            async with session_scope(self._factory) as s:
                result = await s.execute(stmt)
                return result.rowcount > 0
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc

    async def list_page(self, pagination: Pagination) -> list[Post]:
        stmt = (
            select(PostModel)
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
            .limit(pagination.page_size)
            .offset(pagination.offset)
        )
        try:
            async with session_scope(self._factory) as s:
                rows = (await s.execute(stmt)).scalars().all()
                return [_to_post(r) for r in rows]
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc

    async def count(self) -> int:
        stmt = select(sqlfunc.count()).select_from(PostModel)
        try:
            async with session_scope(self._factory) as s:
                return int((await s.execute(stmt)).scalar_one())
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc


# ── Mappers ───────────────────────────────────────────────────────────────────

def _to_post(m: PostModel) -> Post:
    try:
        return Post.create(
            id=m.id,
            title=m.title,
            content=m.content,
            author_id=m.author_id,
            created_at=_as_utc(m.created_at),
            updated_at=_as_utc(m.updated_at),
        )
    except DomainError as exc:
        raise UnexpectedError(f"corrupt post row {m.id}: {exc}") from exc
