"""JWT Token Service for session and password-reset tokens."""

import secrets
from datetime import datetime, timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from app.config import Settings, get_settings
from app.exceptions import ExpiredTokenError, InvalidTokenError

SESSION_PURPOSE = "session"
RESET_PURPOSE = "reset"


def _utcnow() -> datetime:
    return datetime.utcnow()


class JWTService:
    """Handles JWT token creation and validation.

    Session and reset tokens share the signing key but carry a ``purpose``
    claim; a token is only accepted for the purpose it was issued for.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        errors = [e for e in settings.validate() if e.startswith("JWT_SECRET_KEY")]
        if errors:
            raise RuntimeError("; ".join(errors))
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.expire_minutes = settings.JWT_EXPIRE_MINUTES
        self.reset_expire_minutes = settings.RESET_TOKEN_EXPIRE_MINUTES

    def create_session_token(self, user_id: int, username: str) -> str:
        """Create a session token for the given user."""
        now = _utcnow()
        payload = {
            "sub": str(user_id),
            "username": username,
            "purpose": SESSION_PURPOSE,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_reset_token(self, user_id: int) -> tuple[str, datetime]:
        """Create a password reset token. Returns (token, expires_at)."""
        now = _utcnow()
        expires_at = now + timedelta(minutes=self.reset_expire_minutes)
        payload = {
            "sub": str(user_id),
            "purpose": RESET_PURPOSE,
            "jti": secrets.token_urlsafe(16),
            "iat": now,
            "exp": expires_at,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm), expires_at

    def decode_token(self, token: str, purpose: str = SESSION_PURPOSE) -> dict[str, Any]:
        """Decode and validate a token.

        Raises ExpiredTokenError past ``exp`` and InvalidTokenError for a bad
        signature, malformed token or wrong purpose.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredTokenError() from None
        except JWTError:
            raise InvalidTokenError() from None

        if payload.get("purpose") != purpose or "sub" not in payload:
            raise InvalidTokenError()
        return payload


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService()
    return _jwt_service
