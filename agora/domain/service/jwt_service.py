"""Caller identification from session tokens."""

from uuid import UUID

import logfire

from agora.config import AuthSettings
from agora.domain.value import UserId
from agora.util.jwt import JWTError, verify_token

from .base import Service


class JWTService(Service):
    """Resolves the ``auth_token`` cookie to the voting user."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """Return the caller's user ID, or None for anonymous callers.

        Missing, expired, forged and malformed tokens all count as anonymous;
        routes turn that into a 401.

        Args:
            token: Cookie value, if any
        """
        if not token:
            return None

        try:
            payload = verify_token(token, self.auth_settings)
            return UserId(UUID(payload.user_id))
        except (JWTError, ValueError) as e:
            logfire.debug("Treating caller as anonymous", reason=str(e))
            return None
