"""JWT session token handling."""

from datetime import datetime

import jwt
from loguru import logger
from pydantic import ValidationError

from src.core.config import settings
from src.core.domain.ports.token import SessionTokenPayload


def create_session_token(
    username: str,
    email: str,
    fingerprint: str,
    login_time: datetime,
    secret_key: str | None = None,
) -> str:
    """Create a signed admin session token.

    Expiry is not encoded as ``exp``; the session validator measures the age
    from ``loginTime`` so the lifetime stays a server-side setting.
    """
    to_encode = {
        "username": username,
        "email": email,
        "loginTime": int(login_time.timestamp() * 1000),
        "fingerprint": fingerprint,
    }
    return jwt.encode(
        to_encode,
        secret_key or settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_session_token(
    token: str, secret_key: str | None = None
) -> SessionTokenPayload | None:
    """Decode and verify a session token.

    Returns:
        SessionTokenPayload, or None when the token is malformed, tampered
        with or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
        return SessionTokenPayload.model_validate(payload)
    except jwt.InvalidTokenError as e:
        logger.debug(f"Invalid session token: {e}")
        return None
    except ValidationError:
        logger.debug("Session token payload is incomplete")
        return None


class JWTSessionTokenService:
    """Session token service implementation using JWT."""

    def __init__(self, secret_key: str | None = None):
        self._secret_key = secret_key

    def issue(
        self, username: str, email: str, fingerprint: str, login_time: datetime
    ) -> str:
        return create_session_token(
            username, email, fingerprint, login_time, secret_key=self._secret_key
        )

    def decode(self, token: str) -> SessionTokenPayload | None:
        return decode_session_token(token, secret_key=self._secret_key)


def get_session_token_service() -> JWTSessionTokenService:
    """Get session token service instance."""
    return JWTSessionTokenService()
