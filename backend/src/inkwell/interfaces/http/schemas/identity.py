"""Pydantic v2 schemas for auth endpoints.

Field rules repeat the domain's normalization so malformed bodies are rejected
before any hashing work is done.
"""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from inkwell.domain.identity.entities import User
from inkwell.domain.identity.value_objects import (
    LOGIN_USERNAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class RegisterRequest(BaseModel):
    username: str = Field(min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=LOGIN_USERNAME_MAX_LEN)
    password: str = Field(min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, email=user.email, created_at=user.created_at)


class AuthResponse(BaseModel):
    access_token: str
    user: UserResponse
