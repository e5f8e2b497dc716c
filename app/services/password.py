"""Password hashing and strength policy."""

import re

import bcrypt

from app.config import get_settings
from app.exceptions import ValidationError, WeakPasswordError

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

PASSWORD_POLICY = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}")


def hash_password(password: str) -> str:
    """Hash a raw password with a fresh salt."""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long")
    rounds = get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


def validate_password_strength(password: str) -> None:
    """Raise WeakPasswordError unless the password satisfies the policy."""
    if not PASSWORD_POLICY.fullmatch(password):
        raise WeakPasswordError()
