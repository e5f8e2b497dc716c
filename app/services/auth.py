"""Authentication service: registration, login and password lifecycle."""

import logging
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.exceptions import (
    ConflictError,
    ExpiredTokenError,
    InternalError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)
from app.models.user import User
from app.services.email import EmailSender
from app.services.jwt import RESET_PURPOSE, JWTService, get_jwt_service
from app.services.password import hash_password, validate_password_strength, verify_password

logger = logging.getLogger("happy_homes")

RESET_EMAIL_SUBJECT = "Password Reset Request - Happy Homes"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Handles user registration, authentication and password changes."""

    def __init__(self, jwt_service: JWTService | None = None) -> None:
        self.jwt_service = jwt_service or get_jwt_service()

    def _find_by_email(self, db: Session, email: str) -> User | None:
        return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()

    def register(
        self,
        db: Session,
        username: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> User:
        """Register a new user.

        Raises ValidationError for blank identity fields and ConflictError on a
        duplicate username or email.
        """
        username = username.strip()
        email = normalize_email(email)
        first_name = first_name.strip()
        last_name = last_name.strip()

        identity = {"username": username, "email": email, "firstName": first_name, "lastName": last_name}
        blank = [name for name, value in identity.items() if not value]
        if blank:
            raise ValidationError(f"Missing required fields: {', '.join(blank)}")

        existing = (
            db.query(User).filter(or_(User.username == username, func.lower(User.email) == email)).first()
        )
        if existing:
            if existing.username == username:
                raise ConflictError("Username already taken")
            raise ConflictError("Email already registered")

        user = User(
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name or email.
            db.rollback()
            raise ConflictError("Username or email already registered") from None
        db.refresh(user)

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def authenticate(self, db: Session, username: str, password: str) -> User:
        """Verify a username/password pair.

        Raises NotFoundError for an unknown username and InvalidCredentialsError
        for a wrong password.
        """
        user = db.query(User).filter(User.username == username.strip()).first()
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(password, user.password_hash):
            logger.info("Failed login for %s", user.username)
            raise InvalidCredentialsError()

        user.last_login_at = datetime.utcnow()
        db.commit()
        return user

    def username_exists(self, db: Session, username: str) -> bool:
        return db.query(User.id).filter(User.username == username.strip()).first() is not None

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def change_password(self, db: Session, user_id: int, new_password: str) -> None:
        """Replace the password of an authenticated user."""
        validate_password_strength(new_password)
        user = self.get_user(db, user_id)
        user.password_hash = hash_password(new_password)
        db.commit()
        logger.info("Password changed for user id=%s", user_id)

    def request_password_reset(self, db: Session, email: str, sender: EmailSender) -> str:
        """Issue and persist a reset token, then email the reset link.

        The token is committed before sending so a failed delivery can be
        retried. Returns the token.
        """
        user = self._find_by_email(db, email)
        if not user:
            raise NotFoundError("User not found")

        token, expires_at = self.jwt_service.create_reset_token(user.id)
        user.reset_token = token
        user.reset_token_expires_at = expires_at
        db.commit()
        logger.info("Password reset requested for user id=%s", user.id)

        settings = get_settings()
        reset_link = f"{settings.FRONTEND_RESET_URL}?token={token}"
        minutes = self.jwt_service.reset_expire_minutes
        body = (
            "You requested a password reset for your Happy Homes account.\n\n"
            f"Please click the following link to reset your password:\n{reset_link}\n\n"
            f"This link will expire in {minutes} minutes.\n\n"
            "If you did not request this, please ignore this email."
        )
        html = (
            "<h2>Password Reset Request</h2>"
            "<p>You requested a password reset for your Happy Homes account.</p>"
            f'<p><a href="{reset_link}">Reset Password</a></p>'
            f"<p>This link will expire in {minutes} minutes.</p>"
            "<p>If you did not request this, please ignore this email.</p>"
        )
        try:
            sender.send(user.email, RESET_EMAIL_SUBJECT, body, html)
        except Exception:
            logger.exception("Failed to send password reset email to user id=%s", user.id)
            raise InternalError("Could not send reset email. Please try again.") from None

        return token

    def reset_password(self, db: Session, token: str, new_password: str) -> User:
        """Set a new password using a reset token.

        The token must verify cryptographically and also be the one currently
        stored for the user, unexpired. Consuming it clears the stored token.
        """
        try:
            claims = self.jwt_service.decode_token(token, purpose=RESET_PURPOSE)
        except (ExpiredTokenError, InvalidTokenError):
            raise InvalidOrExpiredTokenError() from None

        user = db.get(User, int(claims["sub"]))
        if (
            not user
            or user.reset_token != token
            or not user.reset_token_expires_at
            or user.reset_token_expires_at <= datetime.utcnow()
        ):
            raise InvalidOrExpiredTokenError()

        validate_password_strength(new_password)

        user.password_hash = hash_password(new_password)
        user.clear_reset_token()
        db.commit()
        logger.info("Password reset completed for user id=%s", user.id)
        return user


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
