"""
Authentication helpers for this application.

AUTHENTICATION STRATEGY:
Every protected route is called with ``Authorization: Bearer <jwt>``.
The Flask-Login ``request_loader`` registered in ``create_app()`` decodes the
token and loads the stored account, so inside a route ``current_user`` is the
``User`` row of the caller.

DECORATOR GUIDE:
- @role_required("owner"): salon and barber management
- @role_required("customer"): customer profile and loyalty routes

Responses:
- 401 ``Authorization header missing`` when there is no bearer header
- 403 ``Invalid or expired token`` when the token does not resolve to a user
- 403 ``Access denied: insufficient role`` when the role does not match

Example:
    @barber_bp.route("/my-barbers", methods=["GET"])
    @role_required("owner")
    def get_my_barbers():
        owner_id = current_user_id()
        ...
"""

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request
from flask_login import current_user

logger = logging.getLogger(__name__)


def get_bearer_token() -> Optional[str]:
    """Return the bearer token of the current request, if any."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[len("Bearer ") :].strip()
    return token or None


def get_current_user() -> Any:
    """Return the authenticated account or None."""
    if current_user and getattr(current_user, "is_authenticated", False):
        return current_user
    return None


def current_user_id() -> int:
    return int(current_user.id)


def role_required(*roles: str):
    """Require a valid bearer token whose account has one of ``roles``."""

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if get_bearer_token() is None:
                return jsonify({"success": False, "error": "Authorization header missing"}), 401

            user = get_current_user()
            if user is None:
                logger.warning(
                    "Rejected bearer token",
                    extra={"context": {"path": request.path}},
                )
                return jsonify({"success": False, "error": "Invalid or expired token"}), 403

            if roles and user.role not in roles:
                logger.warning(
                    "Role check failed",
                    extra={
                        "context": {
                            "user_id": user.id,
                            "role": user.role,
                            "required": list(roles),
                            "path": request.path,
                        }
                    },
                )
                return (
                    jsonify({"success": False, "error": "Access denied: insufficient role"}),
                    403,
                )

            return f(*args, **kwargs)

        return decorated_function

    return decorator
