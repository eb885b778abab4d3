"""Server entry point: one asyncio loop running the HTTP and gRPC listeners."""
import asyncio

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inkwell.config import Settings, get_settings
from inkwell.infrastructure.auth.jwt import TokenService
from inkwell.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    init_models,
)
from inkwell.infrastructure.database.repositories.blog import PostRepository
from inkwell.infrastructure.database.repositories.identity import UserRepository
from inkwell.infrastructure.logging import logger, setup_logging
from inkwell.interfaces.facade import BlogFacade
from inkwell.interfaces.grpc.server import build_server
from inkwell.interfaces.http.errors import register_error_handlers
from inkwell.interfaces.http.middleware import install_middleware
from inkwell.interfaces.http.router import api_router


def build_facade(settings: Settings, session_factory: async_sessionmaker[AsyncSession]) -> BlogFacade:
    return BlogFacade(
        user_repo=UserRepository(session_factory),
        post_repo=PostRepository(session_factory),
        tokens=TokenService(
            settings.jwt_secret,
            ttl_seconds=settings.jwt_ttl_seconds,
            leeway_seconds=settings.jwt_leeway_seconds,
        ),
    )


def create_app(settings: Settings, facade: BlogFacade) -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Blogging API: accounts and posts",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )
    app.state.facade = facade

    register_error_handlers(app)
    install_middleware(
        app,
        body_limit_bytes=settings.http_request_body_limit_bytes,
        concurrency_limit=settings.http_concurrency_limit,
        timeout_secs=settings.http_request_timeout_secs,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/healthz")
    async def health():
        return {"status": "ok"}

    return app


async def serve(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    engine = build_engine(settings)
    await init_models(engine)
    facade = build_facade(settings, build_session_factory(engine))

    http_server = uvicorn.Server(
        uvicorn.Config(
            create_app(settings, facade),
            host=settings.http_host,
            port=settings.http_port,
            log_config=None,
        )
    )
    grpc_server = build_server(settings, facade)

    await grpc_server.start()
    logger.info(f"HTTP listening on {settings.http_host}:{settings.http_port}")
    logger.info(f"gRPC listening on {settings.grpc_addr}")
    try:
        # uvicorn owns the signal handlers; when it returns, the gRPC listener follows
        await http_server.serve()
    finally:
        await grpc_server.stop(grace=5)
        await engine.dispose()


def run() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    run()
