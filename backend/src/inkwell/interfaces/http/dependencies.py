"""FastAPI dependency injection: facade and current user."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inkwell.infrastructure.auth.jwt import InvalidTokenError, TokenClaims
from inkwell.interfaces.facade import BlogFacade
from inkwell.interfaces.security import MissingCredentialsError, parse_bearer

# Declares the scheme for the OpenAPI docs; parsing goes through parse_bearer
_bearer = HTTPBearer(auto_error=False)


def get_facade(request: Request) -> BlogFacade:
    return request.app.state.facade


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_claims(
    request: Request,
    facade: Annotated[BlogFacade, Depends(get_facade)],
    _: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> TokenClaims:
    try:
        token = parse_bearer(request.headers.get("authorization"))
        return facade.authenticate(token)
    except (MissingCredentialsError, InvalidTokenError):
        raise _credentials_exception() from None


async def get_current_user_id(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> int:
    return claims.user_id


# Type aliases for cleaner signatures
Facade = Annotated[BlogFacade, Depends(get_facade)]
CurrentUserId = Annotated[int, Depends(get_current_user_id)]
