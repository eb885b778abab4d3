"""Errors raised by the blog client, whatever the transport."""


class BlogClientError(Exception):
    """Base class for client failures."""


class UnauthorizedError(BlogClientError):
    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(message)


class NotFoundError(BlogClientError):
    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)


class InvalidRequestError(BlogClientError):
    pass


class TransportError(BlogClientError):
    pass
