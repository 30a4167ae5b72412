"""JWT helpers for the session cookie.

Tokens are minted by the forum's login flow with a shared HMAC secret. The
karma engine only needs to read the caller's user id back out of them;
``create_token`` exists for that login flow and for tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from agora.config import AuthSettings

REQUIRED_CLAIMS = ["exp", "user_id"]


class TokenPayload(BaseModel):
    """Claims carried by a session token."""

    user_id: str
    handle: str = ""
    exp: datetime


class JWTError(Exception):
    """Token is missing claims, expired, or not signed with our secret."""

    pass


def create_token(
    user_id: str,
    handle: str,
    settings: AuthSettings,
    expires_in: timedelta | None = None,
) -> str:
    """Sign a session token for user_id.

    Args:
        user_id: User ID
        handle: User handle
        settings: Secret, algorithm and default lifetime
        expires_in: Lifetime override, defaults to ``jwt_expiry_days``

    Returns:
        Encoded JWT
    """
    lifetime = expires_in or timedelta(days=settings.jwt_expiry_days)
    claims = {
        "user_id": user_id,
        "handle": handle,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check a token's signature and expiry and return its claims.

    Raises:
        JWTError: If the token cannot be trusted
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    try:
        return TokenPayload(**claims)
    except ValidationError as e:
        raise JWTError("Token claims are malformed") from e
