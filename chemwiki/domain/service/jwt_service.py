"""JWT token domain service."""

from uuid import UUID

import logfire

from chemwiki.config import AuthSettings
from chemwiki.domain.value import Principal, UserId, UserRole
from chemwiki.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, role: UserRole = UserRole.USER) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            role: User role

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id, role=role.value):
            token = create_token(user_id, role.value, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, role=role.value)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info(
                    "JWT token verified", user_id=payload.user_id, role=payload.role
                )
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_principal_from_token(self, token: str | None) -> Principal | None:
        """Resolve a token to a principal without raising exceptions.

        Unknown roles and malformed user IDs count as invalid tokens.

        Args:
            token: JWT token string (optional)

        Returns:
            Principal if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return Principal(
                user_id=UserId(UUID(payload.user_id)), role=UserRole(payload.role)
            )
        except (JWTError, ValueError) as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
