"""JWT creation and verification using python-jose."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from inkwell.domain.errors import UnexpectedError

ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_LEEWAY_SECONDS = 10


class InvalidTokenError(Exception):
    """Any signature, format or expiry failure."""

    def __init__(self) -> None:
        super().__init__("invalid token")


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies stateless HS256 identity tokens."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        leeway_seconds: int = DEFAULT_LEEWAY_SECONDS,
    ) -> None:
        self._secret = secret
        self.ttl_seconds = ttl_seconds if ttl_seconds > 0 else DEFAULT_TTL_SECONDS
        self.leeway_seconds = leeway_seconds

    def issue(self, user_id: int, username: str) -> str:
        expires_at = _utcnow() + timedelta(seconds=self.ttl_seconds)
        payload: dict[str, Any] = {
            "user_id": user_id,
            "username": username,
            "exp": int(expires_at.timestamp()),
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        except JWTError as exc:
            raise UnexpectedError(f"token encode failed: {exc}") from exc

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate a token. Raises InvalidTokenError on any failure."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require_exp": True, "leeway": self.leeway_seconds},
            )
        except JWTError:
            raise InvalidTokenError() from None

        user_id = payload.get("user_id")
        username = payload.get("username")
        exp = payload.get("exp")
        # bool is an int subclass; reject it explicitly
        if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id <= 0:
            raise InvalidTokenError()
        if not isinstance(username, str) or not isinstance(exp, (int, float)):
            raise InvalidTokenError()
        return TokenClaims(
            user_id=user_id,
            username=username,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
