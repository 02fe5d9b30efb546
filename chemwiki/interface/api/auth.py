"""Caller identification for API routes.

Tokens are read from the ``Authorization: Bearer`` header first and from the
``auth_token`` cookie otherwise.
"""

from fastapi import HTTPException, status

from chemwiki.domain.service import JWTService
from chemwiki.domain.value import Principal


def bearer_token(authorization: str | None, auth_token: str | None) -> str | None:
    """Pick the token from the Authorization header or the cookie."""
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return auth_token


def optional_principal(
    jwt_service: JWTService, authorization: str | None, auth_token: str | None
) -> Principal | None:
    """Resolve the caller, or None for anonymous and invalid credentials."""
    return jwt_service.get_principal_from_token(bearer_token(authorization, auth_token))


def require_principal(
    jwt_service: JWTService,
    authorization: str | None,
    auth_token: str | None,
    action: str = "do this",
) -> Principal:
    """Resolve the caller or fail with 401.

    Raises:
        HTTPException: If credentials are missing, invalid or expired
    """
    principal = optional_principal(jwt_service, authorization, auth_token)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
