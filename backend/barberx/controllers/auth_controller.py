"""
Auth controller - registration, login and password reset for customers and
salon owners.

Login returns a bearer token; every protected route expects it in the
``Authorization`` header.
"""

import logging

from flask import Blueprint

from barberx.core.api_utils import (
    api_response,
    get_json_body,
    internal_error_response,
    json_body_required_response,
    service_error_response,
    validation_error_response,
)
from barberx.core.limiter_config import LOGIN_LIMIT, PASSWORD_RESET_LIMIT, limiter
from barberx.core.validation import AuthValidator
from barberx.db.session import get_request_session
from barberx.repositories.user_repo import UserRepository
from barberx.services.auth_service import AuthService

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _get_auth_service() -> AuthService:
    """Dependency injection factory for AuthService."""
    return AuthService(UserRepository(get_request_session()))


def _signup(role: str):
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = AuthValidator.validate_signup(data, role)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        outcome = _get_auth_service().register(data, role)
        return api_response(True, message=outcome["message"], status_code=201)
    except ValueError as e:
        return service_error_response(e, f"{role.capitalize()} signup")
    except Exception as e:
        return internal_error_response(e, f"{role} signup")


@auth_bp.route("/signup/customer", methods=["POST"])
def signup_customer():
    """Register a customer account.

    Expected JSON payload:
    {"name": "Jane Doe", "email": "jane@example.com", "password": "secret1"}
    """
    return _signup("customer")


@auth_bp.route("/signup/owner", methods=["POST"])
def signup_owner():
    """Register a salon owner account. ``phoneNumber`` is required."""
    return _signup("owner")


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(LOGIN_LIMIT)
def login():
    """Exchange credentials for an access token.

    Returns:
    {
        "success": true,
        "message": "Login successful",
        "data": {"token": "...", "role": "owner", "user": {"id": 1, ...}}
    }
    """
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = AuthValidator.validate_login(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        session = _get_auth_service().login(data["email"], data["password"])
        return api_response(True, message="Login successful", data=session)
    except ValueError as e:
        return service_error_response(e, "Login")
    except Exception as e:
        return internal_error_response(e, "login")


@auth_bp.route("/forgot-password", methods=["POST"])
@limiter.limit(PASSWORD_RESET_LIMIT)
def forgot_password():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    email = data.get("email")
    if not isinstance(email, str) or not email.strip():
        return api_response(False, message="Email is required", status_code=400)

    try:
        outcome = _get_auth_service().forgot_password(email)
        return api_response(
            True,
            message=outcome["message"],
            data={"resetToken": outcome["resetToken"]},
        )
    except ValueError as e:
        return service_error_response(e, "Forgot password")
    except Exception as e:
        return internal_error_response(e, "forgot password")


@auth_bp.route("/reset-password", methods=["POST"])
@limiter.limit(PASSWORD_RESET_LIMIT)
def reset_password():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = AuthValidator.validate_reset_password(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        outcome = _get_auth_service().reset_password(data["token"], data["newPassword"])
        return api_response(True, message=outcome["message"])
    except ValueError as e:
        return service_error_response(e, "Reset password")
    except Exception as e:
        return internal_error_response(e, "reset password")
