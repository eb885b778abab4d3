"""Bearer authentication from the ``authorization`` call metadata."""
import grpc

from inkwell.infrastructure.auth.jwt import InvalidTokenError, TokenClaims
from inkwell.interfaces.facade import BlogFacade
from inkwell.interfaces.security import MissingCredentialsError, parse_bearer


class UnauthenticatedError(Exception):
    pass


def authorization_header(context: grpc.aio.ServicerContext) -> str | None:
    for key, value in context.invocation_metadata() or ():
        if key.lower() == "authorization":
            return value.decode("latin-1") if isinstance(value, bytes) else value
    return None


def authenticate(context: grpc.aio.ServicerContext, facade: BlogFacade) -> TokenClaims:
    try:
        token = parse_bearer(authorization_header(context))
        return facade.authenticate(token)
    except (MissingCredentialsError, InvalidTokenError):
        raise UnauthenticatedError("unauthorized") from None
