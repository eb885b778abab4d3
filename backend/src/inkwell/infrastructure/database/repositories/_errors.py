"""Translate backend integrity errors into store-level facts.

asyncpg exposes the SQLSTATE and constraint name on the wrapped driver error;
SQLite only offers the message text, so both are consulted.
"""
from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is None and orig is not None:
        code = getattr(orig.__cause__, "sqlstate", None)
    return code


def constraint_name(exc: IntegrityError) -> str | None:
    orig = exc.orig
    if orig is None:
        return None
    return getattr(orig, "constraint_name", None) or getattr(orig.__cause__, "constraint_name", None)


def _message(exc: IntegrityError) -> str:
    return str(exc.orig or exc).lower()


def is_unique_violation(exc: IntegrityError) -> bool:
    return _sqlstate(exc) == UNIQUE_VIOLATION or "unique constraint" in _message(exc)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return _sqlstate(exc) == FOREIGN_KEY_VIOLATION or "foreign key constraint" in _message(exc)


def message_mentions(exc: IntegrityError, column: str) -> bool:
    """SQLite reports ``UNIQUE constraint failed: users.username``."""
    return f".{column}" in _message(exc)
