"""User API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.schemas.auth import CheckUsernameRequest, CheckUsernameResponse, UserResponse
from app.services.auth import get_auth_service

router = APIRouter(prefix="/api", tags=["Users"])


@router.post("/users/check-username", response_model=CheckUsernameResponse)
def check_username(body: CheckUsernameRequest, db: Session = Depends(get_db)) -> CheckUsernameResponse:
    """Report whether a username is already registered."""
    return CheckUsernameResponse(exists=get_auth_service().username_exists(db, body.username))


@router.get("/user/profile", response_model=UserResponse)
def get_profile(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Get the signed-in user's profile."""
    return UserResponse.model_validate(get_auth_service().get_user(db, user.user_id))
