"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.exceptions import InvalidCredentialsError, NotFoundError
from app.rate_limit import limiter
from app.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    UserResponse,
)
from app.services.auth import get_auth_service
from app.services.email import EmailSender, get_email_sender
from app.services.jwt import get_jwt_service

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=201)
@limiter.limit("5/minute")
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_db)) -> UserResponse:
    """Register a new user account."""
    auth_service = get_auth_service()
    user = auth_service.register(
        db,
        username=body.username,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit("10/minute")
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    """Authenticate and receive a session token."""
    auth_service = get_auth_service()
    try:
        user = auth_service.authenticate(db, body.username, body.password)
    except NotFoundError:
        # Same answer as a wrong password so usernames cannot be probed.
        raise InvalidCredentialsError() from None

    token = get_jwt_service().create_session_token(user_id=user.id, username=user.username)
    return TokenResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/auth/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Change the password of the signed-in user."""
    get_auth_service().change_password(db, user.user_id, body.new_password)
    return MessageResponse(message="Password updated successfully")


@router.post("/auth/forgot-password", response_model=MessageResponse)
@limiter.limit("3/minute")
def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender),
) -> MessageResponse:
    """Email a password reset link."""
    get_auth_service().request_password_reset(db, body.email, sender)
    return MessageResponse(message="Password reset link sent to your email")


@router.post("/auth/reset-password", response_model=MessageResponse)
@limiter.limit("5/minute")
def reset_password(request: Request, body: ResetPasswordRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Reset password using the token from the reset email."""
    get_auth_service().reset_password(db, body.token, body.new_password)
    return MessageResponse(message="Password reset successful")
