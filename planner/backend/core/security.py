"""
Security Utilities.

Session token handling. Tokens are issued by the external auth service
and signed with JWT_SECRET; this module only mints (for tooling and tests)
and validates them.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from planner.backend.core.config import get_app_config, get_settings
from planner.backend.core.exceptions import AuthenticationError
from planner.backend.core.logging import get_logger
from planner.backend.core.utils import utc_now

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a session token for a user.

    Args:
        user_id: Identity of the session owner, stored as `sub`
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode = {
        "sub": user_id,
        "exp": expire,
        "type": ACCESS_TOKEN_TYPE,
        "aud": jwt_config.audience,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a session token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid, expired, or not a session token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != ACCESS_TOKEN_TYPE or not payload.get("sub"):
        logger.warning("Token rejected", extra={"type": payload.get("type")})
        raise AuthenticationError("Invalid or expired token")

    return payload
