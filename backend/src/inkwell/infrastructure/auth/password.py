"""Argon2id password hashing using argon2-cffi."""
from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from inkwell.domain.errors import InvalidCredentialsError, UnexpectedError

_hasher = PasswordHasher(
    time_cost=2,
    memory_cost=19456,  # 19 MiB
    parallelism=1,
    hash_len=32,
    salt_len=16,
)

# Well-formed hash with the same cost parameters as _hasher. Verified against on
# unknown-username logins so both failure paths pay for one Argon2 computation.
DUMMY_PASSWORD_HASH = (
    "$argon2id$v=19$m=19456,t=2,p=1"
    "$aW5rd2VsbC1kdW1teS1zYWx0"
    "$aW5rd2VsbC90aW1pbmctZXF1YWxpemVyL2RpZ2VzdCE"
)


def hash_password(raw_password: str) -> str:
    """Hash a raw password using Argon2id with a fresh random salt."""
    try:
        return _hasher.hash(raw_password)
    except HashingError as exc:
        raise UnexpectedError(f"password hashing failed: {exc}") from exc


def verify_password(raw_password: str, password_hash: str) -> None:
    """Verify a raw password against an encoded Argon2 hash.

    Raises:
        InvalidCredentialsError: the password does not match.
        UnexpectedError: the stored hash is corrupt or cannot be verified.
    """
    try:
        _hasher.verify(password_hash, raw_password)
    except VerifyMismatchError as exc:
        raise InvalidCredentialsError() from exc
    except (InvalidHashError, VerificationError) as exc:
        raise UnexpectedError(f"password verification failed: {exc}") from exc

