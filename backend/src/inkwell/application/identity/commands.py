"""Identity use-case commands: register, login."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass

from inkwell.domain.errors import InvalidCredentialsError, UnexpectedError
from inkwell.domain.identity.entities import NewUser, User
from inkwell.domain.identity.repositories import IUserRepository
from inkwell.domain.identity.value_objects import (
    Email,
    RawPassword,
    Username,
    normalize_login_username,
    require_password,
)
from inkwell.infrastructure.auth.jwt import TokenService
from inkwell.infrastructure.auth.password import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)
from inkwell.infrastructure.logging import logger


@dataclass
class AuthResult:
    user: User
    access_token: str


async def register_user(
    *,
    username: str,
    email: str,
    password: str,
    user_repo: IUserRepository,
    tokens: TokenService,
) -> AuthResult:
    """Register a new user and return an access token.

    Uniqueness is enforced by the store: a conflict surfaces as AlreadyExistsError
    naming ``username`` or ``email`` and no token is issued.
    """
    new_username = Username(username)
    new_email = Email(email)
    raw_password = RawPassword(password)

    # Argon2 is CPU- and memory-bound; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, raw_password.value)

    user = await user_repo.create(
        NewUser(username=new_username, email=new_email, password_hash=password_hash)
    )
    token = tokens.issue(user.id, user.username)
    return AuthResult(user=user, access_token=token)


async def login_user(
    *,
    username: str,
    password: str,
    user_repo: IUserRepository,
    tokens: TokenService,
) -> AuthResult:
    """Authenticate a user and return a fresh access token.

    Unknown usernames still pay for one Argon2 verification against a dummy hash,
    so response timing does not reveal which usernames exist.
    """
    username = normalize_login_username(username)
    password = require_password(password)

    creds = await user_repo.find_by_username(username)
    if creds is None:
        try:
            await asyncio.to_thread(verify_password, password, DUMMY_PASSWORD_HASH)
        except InvalidCredentialsError:
            pass
        except UnexpectedError as exc:
            logger.warning(f"Dummy password verification failed: {exc.detail}")
        raise InvalidCredentialsError()

    await asyncio.to_thread(verify_password, password, creds.password_hash)

    token = tokens.issue(creds.user.id, creds.user.username)
    return AuthResult(user=creds.user, access_token=token)
