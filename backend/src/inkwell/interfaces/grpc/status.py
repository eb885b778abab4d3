"""Domain error -> gRPC status code. Mirrors the REST status table."""
import grpc

from inkwell.domain.errors import (
    AlreadyExistsError,
    DomainError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)

INTERNAL_ERROR = "internal error"

_CODE_BY_ERROR: dict[type[DomainError], grpc.StatusCode] = {
    ValidationError: grpc.StatusCode.INVALID_ARGUMENT,
    AlreadyExistsError: grpc.StatusCode.ALREADY_EXISTS,
    InvalidCredentialsError: grpc.StatusCode.UNAUTHENTICATED,
    NotFoundError: grpc.StatusCode.NOT_FOUND,
    ForbiddenError: grpc.StatusCode.PERMISSION_DENIED,
}


def domain_error_status(exc: DomainError) -> tuple[grpc.StatusCode, str]:
    for error_type, code in _CODE_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code, str(exc)
    return grpc.StatusCode.INTERNAL, INTERNAL_ERROR
