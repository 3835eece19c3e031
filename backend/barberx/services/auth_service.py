import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from barberx.core import config
from barberx.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from barberx.core.security import (
    create_user_token,
    generate_reset_token,
    hash_password,
    verify_password,
)
from barberx.domain.entities import User as DomainUser
from barberx.domain.interfaces import IUserRepository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """Application service for registration, login and password reset.

    Business Rules:
    - Email addresses are unique across customers and owners
    - Owners start with approval status ``pending``
    - Reset tokens are single-use and expire after PASSWORD_RESET_TTL_SECONDS
    """

    def __init__(self, repo: IUserRepository) -> None:
        self.repo = repo

    def register(self, data: Dict[str, Any], role: str) -> Dict[str, str]:
        email = data["email"].strip().lower()
        if self.repo.get_by_email(email) is not None:
            raise ConflictError("Email already registered")

        user = DomainUser(
            name=data["name"].strip(),
            email=email,
            role=role,
            password_hash=hash_password(data["password"]),
            phone_number=data.get("phoneNumber"),
            profile_picture=data.get("profilePicture"),
            status="pending" if role == "owner" else None,
        )
        created = self.repo.create(user)
        logger.info(
            "Account registered",
            extra={"context": {"user_id": created.id, "role": role}},
        )
        return {"message": f"{role.capitalize()} registered successfully"}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(
                "Failed login attempt", extra={"context": {"email": email.strip().lower()}}
            )
            raise AuthenticationError("Invalid credentials")

        token = create_user_token(user.id, user.role)
        logger.info(
            "User logged in", extra={"context": {"user_id": user.id, "role": user.role}}
        )
        return {
            "token": token,
            "role": user.role,
            "user": {"id": user.id, "email": user.email, "fullName": user.name},
        }

    def forgot_password(self, email: str) -> Dict[str, str]:
        """Issue a reset token.

        The token is returned to the caller; there is no mail delivery.
        """
        user = self.repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        token = generate_reset_token()
        expires = datetime.now(timezone.utc) + timedelta(
            seconds=config.PASSWORD_RESET_TTL_SECONDS
        )
        self.repo.set_reset_token(user.id, token, expires)
        logger.info("Password reset token issued", extra={"context": {"user_id": user.id}})
        return {"message": "Reset link generated", "resetToken": token}

    def reset_password(self, token: str, new_password: str) -> Dict[str, str]:
        user = self.repo.get_by_reset_token(token)
        if user is None:
            raise ValueError("Invalid or expired token")

        expires = user.reset_password_expires
        if expires is None or _as_utc(expires) < datetime.now(timezone.utc):
            raise ValueError("Token expired")

        self.repo.update_password(user.id, hash_password(new_password))
        logger.info("Password reset completed", extra={"context": {"user_id": user.id}})
        return {"message": "Password reset successful"}
