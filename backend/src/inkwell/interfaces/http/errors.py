"""Render domain and request errors as ``{"error": "<message>"}`` JSON bodies."""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from inkwell.domain.errors import (
    AlreadyExistsError,
    DomainError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from inkwell.infrastructure.logging import logger

INTERNAL_ERROR = "internal error"

_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
}


def error_body(message: str) -> dict[str, str]:
    return {"error": message}


def domain_error_status(exc: DomainError) -> int:
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = domain_error_status(exc)
    if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        detail = exc.detail if isinstance(exc, UnexpectedError) else str(exc)
        logger.error(f"Unexpected error on {request.method} {request.url.path}: {detail}")
        return JSONResponse(error_body(INTERNAL_ERROR), status_code=code)
    return JSONResponse(error_body(str(exc)), status_code=code)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return JSONResponse(error_body("bad request"), status_code=status.HTTP_400_BAD_REQUEST)
    first = errors[0]
    field = str(first["loc"][-1]) if first.get("loc") else "body"
    message = str(ValidationError(field, first.get("msg", "invalid value")))
    return JSONResponse(error_body(message), status_code=status.HTTP_400_BAD_REQUEST)


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        error_body(str(exc.detail)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(error_body(INTERNAL_ERROR), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
