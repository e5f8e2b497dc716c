"""Pytest configuration and fixtures."""

import os
import tempfile

# Must be set before any app module reads the settings.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("EMAIL_BACKEND", "console")
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="happy_homes_uploads_")

from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.config import get_settings  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.models.property import Property, PropertyImage  # noqa: E402, F401
from app.models.user import User  # noqa: E402, F401
from app.services.auth import AuthService  # noqa: E402
from app.services.email import EmailSender, get_email_sender  # noqa: E402
from app.services.jwt import get_jwt_service  # noqa: E402

TEST_PASSWORD = "Str0ng!Pass"


class RecordingEmailSender(EmailSender):
    """Collects messages instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str, html: str | None = None) -> None:
        if self.fail:
            raise ConnectionError("SMTP relay unavailable")
        self.sent.append({"to": to, "subject": subject, "body": body, "html": html})


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="email_sender")
def email_sender_fixture() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture(name="upload_dir")
def upload_dir_fixture() -> Path:
    return Path(get_settings().UPLOAD_DIR)


@pytest.fixture(name="client")
def client_fixture(db_session: Session, email_sender: RecordingEmailSender):
    """Create a test client with overridden DB and email dependencies and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


def _register(db_session: Session, username: str, email: str) -> dict:
    auth_service = AuthService()
    user = auth_service.register(db_session, username, email, TEST_PASSWORD, "Test", "User")
    token = get_jwt_service().create_session_token(user_id=user.id, username=user.username)
    return {
        "user_id": user.id,
        "username": user.username,
        "email": user.email,
        "password": TEST_PASSWORD,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session):
    """Create a test user and return its data with a session token."""
    return _register(db_session, "alice", "alice@x.com")


@pytest.fixture(name="other_user")
def other_user_fixture(db_session: Session):
    """A second, unrelated account."""
    return _register(db_session, "bob", "bob@x.com")
