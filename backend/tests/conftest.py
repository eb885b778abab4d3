"""Shared fixtures: token service, in-memory facade, REST test client, SQLite engine."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

from fakes import Clock, FakePostRepository, FakeUserRepository
from inkwell.config import Settings
from inkwell.infrastructure.auth.jwt import TokenService
from inkwell.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    init_models,
)
from inkwell.interfaces.facade import BlogFacade
from inkwell.main import create_app

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'inkwell.db'}",
        jwt_secret=TEST_SECRET,
        environment="test",
    )


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository(Clock())


@pytest.fixture
def post_repo(user_repo) -> FakePostRepository:
    return FakePostRepository(user_repo, Clock())


@pytest.fixture
def facade(user_repo, post_repo, tokens) -> BlogFacade:
    return BlogFacade(user_repo=user_repo, post_repo=post_repo, tokens=tokens)


@pytest.fixture
def client(settings, facade):
    with TestClient(create_app(settings, facade)) as c:
        yield c


@pytest.fixture
async def session_factory(settings):
    """A fresh SQLite database with foreign keys enforced."""
    engine = build_engine(settings)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await init_models(engine)
    yield build_session_factory(engine)
    await engine.dispose()
