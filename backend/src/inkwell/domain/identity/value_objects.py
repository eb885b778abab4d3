"""Immutable value objects for the Identity bounded context.

Each value object normalizes its input (trim, and lower-case for emails) before
validating it, so ``Username("  bob  ").value == "bob"``.
"""
from dataclasses import dataclass
import re

from inkwell.domain.errors import ValidationError

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9\-]+(\.[a-zA-Z0-9\-]+)*\.[a-zA-Z]{2,}$")

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 64
LOGIN_USERNAME_MAX_LEN = 64
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip().lower()
        if not _EMAIL_PATTERN.match(normalized):
            raise ValidationError("email", "must be a valid email")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Username:
    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip()
        if not USERNAME_MIN_LEN <= len(normalized) <= USERNAME_MAX_LEN:
            raise ValidationError("username", f"must be {USERNAME_MIN_LEN}..{USERNAME_MAX_LEN} chars")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RawPassword:
    """Plaintext password accepted at registration. Never stored or logged."""
    value: str

    def __post_init__(self) -> None:
        # counted in characters, not bytes
        if not PASSWORD_MIN_LEN <= len(self.value) <= PASSWORD_MAX_LEN:
            raise ValidationError("password", f"must be {PASSWORD_MIN_LEN}..{PASSWORD_MAX_LEN} chars")

    def __repr__(self) -> str:
        return "RawPassword(***)"


def normalize_login_username(raw: str) -> str:
    """Looser rule than registration: any existing name of 1..64 chars may attempt a login."""
    username = raw.strip()
    if not 1 <= len(username) <= LOGIN_USERNAME_MAX_LEN:
        raise ValidationError("username", f"must be 1..{LOGIN_USERNAME_MAX_LEN} chars")
    return username


def require_password(raw: str) -> str:
    if not raw:
        raise ValidationError("password", "must not be empty")
    return raw
