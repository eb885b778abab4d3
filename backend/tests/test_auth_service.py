import statistics
import time

import pytest

from inkwell.application.identity import commands
from inkwell.application.identity.commands import login_user, register_user
from inkwell.domain.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    UnexpectedError,
    ValidationError,
)
from inkwell.infrastructure.auth.password import DUMMY_PASSWORD_HASH


async def _register(user_repo, tokens, username="alice", email="alice@example.com", password="password123"):
    return await register_user(
        username=username, email=email, password=password, user_repo=user_repo, tokens=tokens
    )


async def test_register_normalizes_and_issues_token(user_repo, tokens):
    result = await _register(user_repo, tokens, username="  alice ", email=" Alice@Example.com ")
    assert result.user.username == "alice"
    assert result.user.email == "alice@example.com"
    claims = tokens.verify(result.access_token)
    assert (claims.user_id, claims.username) == (result.user.id, "alice")


async def test_register_stores_an_argon2_hash(user_repo, tokens):
    await _register(user_repo, tokens)
    creds = await user_repo.find_by_username("alice")
    assert creds.password_hash.startswith("$argon2id$")
    assert "password123" not in creds.password_hash


@pytest.mark.parametrize(
    ("username", "email", "field"),
    [
        ("alice", "other@example.com", "username"),
        ("bob", "ALICE@example.com", "email"),
    ],
)
async def test_register_duplicate_names_the_field(user_repo, tokens, username, email, field):
    await _register(user_repo, tokens)
    with pytest.raises(AlreadyExistsError) as exc_info:
        await _register(user_repo, tokens, username=username, email=email)
    assert exc_info.value.field == field
    assert len(user_repo) == 1


async def test_register_validates_before_hashing(user_repo, tokens, monkeypatch):
    def fail(_):
        raise AssertionError("hash_password must not run")

    monkeypatch.setattr(commands, "hash_password", fail)
    with pytest.raises(ValidationError):
        await _register(user_repo, tokens, password="short")


async def test_login_returns_fresh_token(user_repo, tokens):
    registered = await _register(user_repo, tokens)
    result = await login_user(
        username=" alice ", password="password123", user_repo=user_repo, tokens=tokens
    )
    assert result.user == registered.user
    assert tokens.verify(result.access_token).user_id == registered.user.id


async def test_login_wrong_password(user_repo, tokens):
    await _register(user_repo, tokens)
    with pytest.raises(InvalidCredentialsError):
        await login_user(username="alice", password="wrong-password", user_repo=user_repo, tokens=tokens)


async def test_login_unknown_user_verifies_against_dummy_hash(user_repo, tokens, monkeypatch):
    calls = []
    real_verify = commands.verify_password

    def spy(raw, encoded):
        calls.append(encoded)
        return real_verify(raw, encoded)

    monkeypatch.setattr(commands, "verify_password", spy)
    with pytest.raises(InvalidCredentialsError) as exc_info:
        await login_user(username="ghost", password="password123", user_repo=user_repo, tokens=tokens)
    assert calls == [DUMMY_PASSWORD_HASH]
    assert str(exc_info.value) == "invalid credentials"


async def test_login_unknown_and_wrong_password_fail_identically(user_repo, tokens):
    await _register(user_repo, tokens)
    with pytest.raises(InvalidCredentialsError) as unknown:
        await login_user(username="ghost", password="password123", user_repo=user_repo, tokens=tokens)
    with pytest.raises(InvalidCredentialsError) as wrong:
        await login_user(username="alice", password="nope-nope", user_repo=user_repo, tokens=tokens)
    assert str(unknown.value) == str(wrong.value)


async def test_login_unknown_user_absorbs_dummy_verify_failure(user_repo, tokens, monkeypatch):
    def broken(raw, encoded):
        raise UnexpectedError("dummy verify failed")

    monkeypatch.setattr(commands, "verify_password", broken)
    with pytest.raises(InvalidCredentialsError):
        await login_user(username="ghost", password="password123", user_repo=user_repo, tokens=tokens)


async def test_login_rejects_empty_password(user_repo, tokens):
    with pytest.raises(ValidationError, match="password"):
        await login_user(username="alice", password="", user_repo=user_repo, tokens=tokens)


async def _failed_login_seconds(user_repo, tokens, username, password):
    started = time.perf_counter()
    with pytest.raises(InvalidCredentialsError):
        await login_user(username=username, password=password, user_repo=user_repo, tokens=tokens)
    return time.perf_counter() - started


async def test_unknown_user_login_costs_about_as_much_as_wrong_password(user_repo, tokens):
    await _register(user_repo, tokens)
    unknown, wrong = [], []
    for _ in range(3):
        unknown.append(await _failed_login_seconds(user_repo, tokens, "ghost", "password123"))
        wrong.append(await _failed_login_seconds(user_repo, tokens, "alice", "wrong-password"))

    ratio = statistics.median(unknown) / statistics.median(wrong)
    assert 1 / 3 < ratio < 3
