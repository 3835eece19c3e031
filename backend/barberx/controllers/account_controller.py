"""
Account controller - role-gated landing routes for customers and owners.
"""

from flask import Blueprint
from flask_login import current_user

from barberx.core.api_utils import api_response
from barberx.core.auth_decorators import role_required

customer_bp = Blueprint("customer", __name__, url_prefix="/api/customer")
owner_bp = Blueprint("owner", __name__, url_prefix="/api/owner")


def _account_summary():
    return {
        "id": current_user.id,
        "name": current_user.name,
        "email": current_user.email,
        "role": current_user.role,
    }


@customer_bp.route("/profile", methods=["GET"])
@role_required("customer")
def customer_home():
    return api_response(True, message="Customer profile route", data=_account_summary())


@owner_bp.route("/dashboard", methods=["GET"])
@role_required("owner")
def owner_dashboard():
    data = _account_summary()
    data["status"] = current_user.status
    return api_response(True, message="Welcome to owner dashboard", data=data)
