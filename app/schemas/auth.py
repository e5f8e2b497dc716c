"""Pydantic schemas for authentication and user endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    username: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=3, max_length=256)
    password: str = Field(min_length=1)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(CamelModel):
    token: str
    user: UserResponse


class CheckUsernameRequest(CamelModel):
    username: str = Field(min_length=1)


class CheckUsernameResponse(CamelModel):
    exists: bool


class ChangePasswordRequest(CamelModel):
    new_password: str = Field(min_length=1)


class ForgotPasswordRequest(CamelModel):
    email: str = Field(min_length=1)


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


class MessageResponse(BaseModel):
    message: str
