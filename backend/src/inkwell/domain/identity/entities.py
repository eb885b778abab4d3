"""Domain entities for the Identity bounded context."""
from dataclasses import dataclass
from datetime import datetime

from inkwell.domain.errors import ValidationError

from .value_objects import Email, Username


@dataclass(frozen=True)
class User:
    """A registered user. The credential hash lives in UserCredentials, never here."""
    id: int
    username: str
    email: str
    created_at: datetime

    @classmethod
    def create(cls, id: int, username: str, email: str, created_at: datetime) -> "User":
        if id <= 0:
            raise ValidationError("id", "must be > 0")
        return cls(
            id=id,
            username=str(Username(username)),
            email=str(Email(email)),
            created_at=created_at,
        )


@dataclass(frozen=True)
class UserCredentials:
    user: User
    password_hash: str


@dataclass(frozen=True)
class NewUser:
    username: Username
    email: Email
    password_hash: str
