"""Session token utilities.

Access tokens are minted by the identity provider (GoTrue-style JWTs with
``sub`` and ``email`` claims); this module only verifies them.
"""

from datetime import datetime

import jwt
from pydantic import BaseModel

from fieldops.config import AuthSettings
from fieldops.util.error import UtilError


class SessionClaims(BaseModel):
    """Verified session token claims."""

    sub: str
    email: str
    exp: datetime


class JWTError(UtilError):
    """JWT-related error."""

    pass


def verify_token(token: str, settings: AuthSettings) -> SessionClaims:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token claims if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
        return SessionClaims(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")
