"""Authentication dependencies for FastAPI routes."""

from dataclasses import dataclass

from fastapi import Request

from app.exceptions import UnauthenticatedError
from app.services.jwt import get_jwt_service


@dataclass
class CurrentUser:
    """Authenticated user context."""

    user_id: int
    username: str


def get_bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(request: Request) -> CurrentUser:
    """Extract and validate the user from the Bearer token.

    Missing token: 401. Expired token: 401. Invalid token: 403.
    """
    token = get_bearer_token(request)
    if not token:
        raise UnauthenticatedError("Not authenticated")

    payload = get_jwt_service().decode_token(token)
    user = CurrentUser(user_id=int(payload["sub"]), username=payload.get("username", ""))
    request.state.user = user
    return user
