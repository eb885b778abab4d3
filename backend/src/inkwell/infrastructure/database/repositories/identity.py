"""Concrete SQLAlchemy repository for the identity context."""
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inkwell.domain.errors import AlreadyExistsError, DomainError, UnexpectedError
from inkwell.domain.identity.entities import NewUser, User, UserCredentials
from inkwell.infrastructure.database.connection import session_scope
from inkwell.infrastructure.database.models.identity import (
    EMAIL_CONSTRAINT,
    USERNAME_CONSTRAINT,
    UserModel,
)

from ._errors import constraint_name, is_unique_violation, message_mentions


class UserRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._factory = session_factory

    async def create(self, new_user: NewUser) -> User:
        try:
            async with session_scope(self._factory) as session:
                model = UserModel(
                    username=str(new_user.username),
                    email=str(new_user.email),
                    password_hash=new_user.password_hash,
                    created_at=datetime.now(timezone.utc),
                )
                session.add(model)
                await session.flush()
                return _to_user(model)
        except IntegrityError as exc:
            raise _map_integrity_error(exc) from exc
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc

    async def find_by_username(self, username: str) -> UserCredentials | None:
        return await self._find_one(UserModel.username == username)

    async def get_by_id(self, user_id: int) -> User | None:
        try:
            async with session_scope(self._factory) as session:
                row = await session.get(UserModel, user_id)
                return _to_user(row) if row else None
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc

    async def _find_one(self, condition) -> UserCredentials | None:
        stmt = select(UserModel).where(condition)
        try:
            async with session_scope(self._factory) as session:
                row = (await session.execute(stmt)).scalar_one_or_none()
                if row is None:
                    return None
                return UserCredentials(user=_to_user(row), password_hash=row.password_hash)
        except SQLAlchemyError as exc:
            raise UnexpectedError(str(exc)) from exc


def _map_integrity_error(exc: IntegrityError) -> Exception:
    if not is_unique_violation(exc):
        return UnexpectedError(str(exc))
    name = constraint_name(exc)
    if name == USERNAME_CONSTRAINT or (name is None and message_mentions(exc, "username")):
        return AlreadyExistsError("username")
    if name == EMAIL_CONSTRAINT or (name is None and message_mentions(exc, "email")):
        return AlreadyExistsError("email")
    return AlreadyExistsError("user")


# ── Mappers ───────────────────────────────────────────────────────────────────

def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def _to_user(m: UserModel) -> User:
    try:
        return User.create(
            id=m.id,
            username=m.username,
            email=m.email,
            created_at=_as_utc(m.created_at),
        )
    except DomainError as exc:
        raise UnexpectedError(f"corrupt user row {m.id}: {exc}") from exc
