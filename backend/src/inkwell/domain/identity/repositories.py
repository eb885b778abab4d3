"""Store interface for users. One SQLAlchemy implementation, swappable fakes in tests."""
from typing import Protocol

from .entities import NewUser, User, UserCredentials


class IUserRepository(Protocol):
    async def create(self, new_user: NewUser) -> User:
        """Persist a user. Raises AlreadyExistsError naming the conflicting field."""
        ...

    async def find_by_username(self, username: str) -> UserCredentials | None: ...

    async def get_by_id(self, user_id: int) -> User | None: ...
