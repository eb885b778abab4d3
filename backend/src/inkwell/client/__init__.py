from .client import BlogClient, Transport
from .errors import (
    BlogClientError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
)
from .grpc_client import GrpcTransport
from .http_client import HttpTransport
from .models import AuthResponse, ListPostsResponse, Post, User

__all__ = [
    "BlogClient",
    "Transport",
    "HttpTransport",
    "GrpcTransport",
    "BlogClientError",
    "UnauthorizedError",
    "NotFoundError",
    "InvalidRequestError",
    "TransportError",
    "AuthResponse",
    "ListPostsResponse",
    "Post",
    "User",
]
