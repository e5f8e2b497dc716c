"""Tests for session and reset token issuance and validation."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from jose import jwt

from app.config import Settings
from app.exceptions import ExpiredTokenError, InvalidTokenError
from app.services.jwt import RESET_PURPOSE, SESSION_PURPOSE, JWTService


@pytest.fixture(name="jwt_service")
def jwt_service_fixture() -> JWTService:
    return JWTService()


def _issued_minutes_ago(minutes: int):
    return patch("app.services.jwt._utcnow", return_value=datetime.utcnow() - timedelta(minutes=minutes))


class TestSessionTokens:
    def test_fresh_token_validates(self, jwt_service: JWTService):
        token = jwt_service.create_session_token(7, "alice")
        payload = jwt_service.decode_token(token)
        assert payload["sub"] == "7"
        assert payload["username"] == "alice"
        assert payload["purpose"] == SESSION_PURPOSE

    def test_valid_just_before_one_hour(self, jwt_service: JWTService):
        with _issued_minutes_ago(59):
            token = jwt_service.create_session_token(7, "alice")
        assert jwt_service.decode_token(token)["sub"] == "7"

    def test_expires_after_one_hour(self, jwt_service: JWTService):
        with _issued_minutes_ago(61):
            token = jwt_service.create_session_token(7, "alice")
        with pytest.raises(ExpiredTokenError):
            jwt_service.decode_token(token)

    def test_wrong_signature(self, jwt_service: JWTService):
        forged = jwt.encode(
            {"sub": "7", "purpose": SESSION_PURPOSE, "exp": datetime.utcnow() + timedelta(minutes=5)},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token(forged)

    def test_garbage(self, jwt_service: JWTService):
        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token("not-a-jwt")

    def test_missing_purpose_rejected(self, jwt_service: JWTService):
        token = jwt.encode(
            {"sub": "7", "exp": datetime.utcnow() + timedelta(minutes=5)},
            jwt_service.secret_key,
            algorithm=jwt_service.algorithm,
        )
        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token(token)


class TestResetTokens:
    def test_reset_token_purpose(self, jwt_service: JWTService):
        token, expires_at = jwt_service.create_reset_token(7)
        payload = jwt_service.decode_token(token, purpose=RESET_PURPOSE)
        assert payload["sub"] == "7"
        assert expires_at > datetime.utcnow() + timedelta(minutes=14)
        assert expires_at <= datetime.utcnow() + timedelta(minutes=15)

    def test_reset_token_rejected_as_session(self, jwt_service: JWTService):
        token, _ = jwt_service.create_reset_token(7)
        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token(token)

    def test_session_token_rejected_as_reset(self, jwt_service: JWTService):
        token = jwt_service.create_session_token(7, "alice")
        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token(token, purpose=RESET_PURPOSE)

    def test_reset_tokens_are_unique(self, jwt_service: JWTService):
        first, _ = jwt_service.create_reset_token(7)
        second, _ = jwt_service.create_reset_token(7)
        assert first != second

    def test_reset_token_expires_after_fifteen_minutes(self, jwt_service: JWTService):
        with _issued_minutes_ago(16):
            token, _ = jwt_service.create_reset_token(7)
        with pytest.raises(ExpiredTokenError):
            jwt_service.decode_token(token, purpose=RESET_PURPOSE)

    def test_reset_token_valid_within_fifteen_minutes(self, jwt_service: JWTService):
        with _issued_minutes_ago(14):
            token, _ = jwt_service.create_reset_token(7)
        assert jwt_service.decode_token(token, purpose=RESET_PURPOSE)["purpose"] == RESET_PURPOSE


class TestSecretConfiguration:
    def test_missing_secret_refuses_to_start(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
        settings = Settings()
        assert "JWT_SECRET_KEY is not set" in settings.validate()
        with pytest.raises(RuntimeError):
            JWTService(settings)

    def test_placeholder_secret_rejected(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET_KEY", "your_jwt_secret")
        with pytest.raises(RuntimeError):
            JWTService(Settings())

    def test_configured_secret_accepted(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET_KEY", "a-real-secret")
        service = JWTService(Settings())
        assert service.secret_key == "a-real-secret"
