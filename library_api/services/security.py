"""
Security Service

Handles bearer token signing and verification, and the demonstration
password check used by the login mutation.

Tokens are HS256 JWTs signed with settings.secret_key and carry:
- username: the user's login name
- id: the user's primary key, as a string
- exp: expiry timestamp

SECURITY NOTE:
==============
There are no per-user passwords. Every user logs in with DEMO_PASSWORD.
This is for demonstration only and must not be deployed as-is.

Usage:
    from library_api.services.security import create_access_token, decode_access_token

    token = create_access_token(username="alice", user_id=1)
    payload = decode_access_token(token)
    payload["id"]  # "1"
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from library_api.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

ALGORITHM = "HS256"

# Shared by every account
DEMO_PASSWORD = "secret"


class TokenInvalidError(Exception):
    """Raised when a supplied bearer token fails verification."""

    def __init__(self, message: str = "invalid token"):
        super().__init__(message)
        self.message = message


def check_password(password: str) -> bool:
    """
    Check a login password against the shared demonstration password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return secrets.compare_digest(password.encode(), DEMO_PASSWORD.encode())


def create_access_token(
    username: str,
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed token for a user.

    Args:
        username: The user's login name
        user_id: The user's primary key
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "username": username,
        "id": str(user_id),
        "exp": datetime.now(UTC) + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def decode_access_token(token: str) -> dict:
    """
    Verify a token and return its payload.

    Args:
        token: The JWT token string (without the 'Bearer ' prefix)

    Returns:
        Decoded payload; "id" is a string of digits

    Raises:
        TokenInvalidError: Bad signature, malformed token, expired token,
            or a missing/non-numeric id claim
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise TokenInvalidError() from e

    user_id = payload.get("id")
    if user_id is None or not str(user_id).isdigit():
        logger.warning("Token payload has no usable id claim")
        raise TokenInvalidError()

    return payload


def parse_bearer(authorization: str | None) -> str | None:
    """
    Extract the token from an Authorization header value.

    The "Bearer " prefix is matched case-insensitively. Returns None when
    the header is absent or uses another scheme.
    """
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:]
    return None
