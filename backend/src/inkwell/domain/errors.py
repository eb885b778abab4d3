"""Domain error taxonomy shared by services, stores and transport adapters."""


class DomainError(Exception):
    pass


class ValidationError(DomainError):
    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"validation failed for '{field}': {reason}")


class NotFoundError(DomainError):
    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"resource not found: {resource}")


class AlreadyExistsError(DomainError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"resource already exists: {field}")


class ForbiddenError(DomainError):
    def __init__(self) -> None:
        super().__init__("forbidden")


class InvalidCredentialsError(DomainError):
    """Same message whether the username is unknown or the password is wrong."""

    def __init__(self) -> None:
        super().__init__("invalid credentials")


class UnexpectedError(DomainError):
    """Opaque internal fault. ``detail`` is for logs only, never for clients."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"unexpected domain error: {detail}")
