from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

MIN_JWT_SECRET_LEN = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, gt=0)
    db_max_overflow: int = Field(default=10, ge=0)

    # Security
    jwt_secret: str
    jwt_ttl_seconds: int = 3600
    jwt_leeway_seconds: int = Field(default=10, ge=0)

    # HTTP listener
    http_host: str = "0.0.0.0"
    http_port: int = Field(default=8080, gt=0)
    http_request_body_limit_bytes: int = Field(default=1024 * 1024, gt=0)
    http_concurrency_limit: int = Field(default=256, gt=0)
    http_request_timeout_secs: float = Field(default=10, gt=0)

    # gRPC listener
    grpc_addr: str = "0.0.0.0:50051"
    grpc_concurrency_limit: int = Field(default=256, gt=0)
    grpc_request_timeout_secs: float = Field(default=10, gt=0)
    grpc_max_decoding_message_size_bytes: int = Field(default=4 * 1024 * 1024, gt=0)
    grpc_max_encoding_message_size_bytes: int = Field(default=4 * 1024 * 1024, gt=0)

    # App
    environment: str = "development"
    app_name: str = "Inkwell"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    log_file: str | None = None

    # CORS: comma-separated in .env, CORS_ORIGINS=http://localhost:8000,http://127.0.0.1:8000
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    @field_validator("database_url", "jwt_secret")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("jwt_secret")
    @classmethod
    def secret_long_enough(cls, v: str) -> str:
        if len(v) < MIN_JWT_SECRET_LEN:
            raise ValueError(f"JWT_SECRET must be at least {MIN_JWT_SECRET_LEN} characters")
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [entry.strip() for entry in v.split(",") if entry.strip()]
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
