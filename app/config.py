"""Configuration settings for Happy Homes."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

# Values shipped in example configs; never accepted as a signing key.
PLACEHOLDER_SECRETS = {"your_jwt_secret", "your-secret-key", "changeme"}


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        # Database
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./happy_homes.db")

        # JWT
        self.JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "")
        self.JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))
        self.RESET_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "15"))

        # Password hashing
        self.BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

        # Upload
        self.UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
        self.MAX_IMAGE_SIZE_MB: int = int(os.getenv("MAX_IMAGE_SIZE_MB", "10"))
        self.MAX_IMAGES_PER_PROPERTY: int = int(os.getenv("MAX_IMAGES_PER_PROPERTY", "5"))

        # Email
        self.EMAIL_BACKEND: str = os.getenv("EMAIL_BACKEND", "console")
        self.EMAIL_HOST: str = os.getenv("EMAIL_HOST", "localhost")
        self.EMAIL_PORT: int = int(os.getenv("EMAIL_PORT", "587"))
        self.EMAIL_USE_TLS: bool = os.getenv("EMAIL_USE_TLS", "true").lower() == "true"
        self.EMAIL_HOST_USER: str = os.getenv("EMAIL_HOST_USER", "")
        self.EMAIL_HOST_PASSWORD: str = os.getenv("EMAIL_HOST_PASSWORD", "")
        self.EMAIL_FROM: str = os.getenv("EMAIL_FROM", "no-reply@happyhomes.local")
        self.EMAIL_TIMEOUT_SECONDS: float = float(os.getenv("EMAIL_TIMEOUT_SECONDS", "10"))
        self.FRONTEND_RESET_URL: str = os.getenv("FRONTEND_RESET_URL", "http://localhost:3000/forgot-password")

        # Application
        self.APP_ENV: str = os.getenv("APP_ENV", "development")
        self.DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    def validate(self) -> list[str]:
        """Validate settings and return list of errors."""
        errors = []
        if not self.JWT_SECRET_KEY:
            errors.append("JWT_SECRET_KEY is not set")
        elif self.JWT_SECRET_KEY in PLACEHOLDER_SECRETS:
            errors.append("JWT_SECRET_KEY is a placeholder value")
        if self.EMAIL_BACKEND not in ("console", "smtp"):
            errors.append(f"EMAIL_BACKEND must be 'console' or 'smtp', got '{self.EMAIL_BACKEND}'")
        if self.MAX_IMAGES_PER_PROPERTY < 0:
            errors.append("MAX_IMAGES_PER_PROPERTY must not be negative")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
