import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from barberx.core import config

# Password hashing configuration
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

WEAK_SECRETS = ["dev-jwt-secret-change-me", "dev-secret-change-me", "secret123"]


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash.

    Returns False for a missing or malformed hash instead of raising.
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


# JWT configuration
def get_jwt_secret_key() -> str:
    """Get JWT secret key with production validation.

    In production (FLASK_ENV=production) the secret must be set, must not be
    one of the development defaults and must be at least 32 characters long.

    Raises:
        ValueError: If production deployment uses a weak or missing JWT secret
    """
    secret = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    if config.is_production():
        if secret in WEAK_SECRETS or len(secret) < 32:
            raise ValueError(
                "Production deployment requires strong JWT_SECRET_KEY (min 32 chars). "
                "Set JWT_SECRET_KEY environment variable."
            )

    return secret


JWT_ALGORITHM = "HS256"


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            hours=config.JWT_EXPIRATION_HOURS
        )

    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, get_jwt_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a JWT access token.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, get_jwt_secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def create_user_token(user_id: int, role: str) -> str:
    """Create an access token carrying the user id and role."""
    token_data = {"sub": str(user_id), "role": role, "type": "access"}
    return create_access_token(token_data)


def get_user_from_token(token: str) -> Optional[Dict[str, Any]]:
    """Extract ``{"user_id", "role"}`` from an access token.

    Returns None for invalid/expired tokens, tokens of another type or
    tokens with a malformed subject.
    """
    payload = decode_access_token(token)
    if payload is None or payload.get("type") != "access":
        return None

    user_id = payload.get("sub")
    role = payload.get("role")
    if user_id is None or role is None:
        return None

    try:
        return {"user_id": int(user_id), "role": role}
    except (TypeError, ValueError):
        return None


def generate_reset_token() -> str:
    """Random password reset token: 20 bytes, hex encoded."""
    return secrets.token_hex(20)
