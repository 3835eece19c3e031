"""
Customer profile controller - profile, preferences and loyalty routes.

All routes require a customer bearer token. ``/my-profile`` and the
preference routes act on the caller's own profile; loyalty adjustments
address a customer by id.
"""

import logging

from flask import Blueprint, request

from barberx.core.api_utils import (
    api_response,
    get_json_body,
    internal_error_response,
    json_body_required_response,
    list_response,
    parse_limit,
    service_error_response,
    validation_error_response,
)
from barberx.core.auth_decorators import current_user_id, role_required
from barberx.core.validation import CustomerProfileValidator
from barberx.db.session import get_request_session
from barberx.repositories.customer_profile_repo import CustomerProfileRepository
from barberx.schemas.dtos import (
    booking_from_payload,
    profile_fields_from_payload,
    profile_to_dict,
)
from barberx.services.customer_profile_service import (
    DEFAULT_TOP_LOYALTY_LIMIT,
    CustomerProfileService,
)

logger = logging.getLogger(__name__)

customer_profile_bp = Blueprint(
    "customer_profile", __name__, url_prefix="/api/customer-profile"
)


def _get_profile_service() -> CustomerProfileService:
    """Dependency injection factory for CustomerProfileService."""
    return CustomerProfileService(CustomerProfileRepository(get_request_session()))


def _profile_response(profile, message=None, status_code=200):
    return api_response(
        True, message=message, data=profile_to_dict(profile), status_code=status_code
    )


@customer_profile_bp.route("", methods=["POST"])
@role_required("customer")
def create_profile():
    """Create the caller's profile.

    Expected JSON payload:
    {
        "firstName": "Ana",
        "lastName": "Silva",
        "address": {"city": "Austin", "zipCode": "73301"},
        "preferences": {"notifications": {"sms": true}}
    }
    """
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = CustomerProfileValidator.validate_create(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        profile = _get_profile_service().create_profile(
            current_user_id(), profile_fields_from_payload(data)
        )
        return _profile_response(
            profile, "Customer profile created successfully", status_code=201
        )
    except ValueError as e:
        return service_error_response(e, "Profile creation")
    except Exception as e:
        return internal_error_response(e, "profile creation")


@customer_profile_bp.route("/my-profile", methods=["GET"])
@role_required("customer")
def get_my_profile():
    try:
        profile = _get_profile_service().get_profile_by_customer_id(current_user_id())
        return _profile_response(profile)
    except ValueError as e:
        return service_error_response(e, "Profile lookup")
    except Exception as e:
        return internal_error_response(e, "profile lookup")


@customer_profile_bp.route("/my-profile", methods=["PUT"])
@role_required("customer")
def update_my_profile():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = CustomerProfileValidator.validate_update(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        profile = _get_profile_service().update_profile(
            current_user_id(), profile_fields_from_payload(data)
        )
        return _profile_response(profile, "Customer profile updated successfully")
    except ValueError as e:
        return service_error_response(e, "Profile update")
    except Exception as e:
        return internal_error_response(e, "profile update")


@customer_profile_bp.route("/my-profile", methods=["DELETE"])
@role_required("customer")
def delete_my_profile():
    try:
        outcome = _get_profile_service().delete_profile(current_user_id())
        return api_response(True, message=outcome["message"])
    except ValueError as e:
        return service_error_response(e, "Profile deletion")
    except Exception as e:
        return internal_error_response(e, "profile deletion")


@customer_profile_bp.route("/all", methods=["GET"])
@role_required("customer")
def get_all_profiles():
    """All profiles, filtered by ``membershipTier`` and ``isActive``."""
    result = CustomerProfileValidator.validate_search_params(request.args)
    if not result.is_valid:
        return validation_error_response(result)

    is_active = request.args.get("isActive")
    try:
        profiles = _get_profile_service().get_all_profiles(
            membership_tier=request.args.get("membershipTier"),
            is_active=None if is_active is None else is_active == "true",
        )
        return list_response([profile_to_dict(p) for p in profiles])
    except ValueError as e:
        return service_error_response(e, "Profile listing")
    except Exception as e:
        return internal_error_response(e, "profile listing")


@customer_profile_bp.route("/active", methods=["GET"])
@role_required("customer")
def get_active_profiles():
    try:
        profiles = _get_profile_service().get_active_profiles()
        return list_response([profile_to_dict(p) for p in profiles])
    except Exception as e:
        return internal_error_response(e, "active profile listing")


@customer_profile_bp.route("/search", methods=["GET"])
@role_required("customer")
def search_profiles():
    try:
        profiles = _get_profile_service().search_profiles(request.args.get("q"))
        return list_response([profile_to_dict(p) for p in profiles])
    except ValueError as e:
        return service_error_response(e, "Profile search")
    except Exception as e:
        return internal_error_response(e, "profile search")


@customer_profile_bp.route("/membership/<string:tier>", methods=["GET"])
@role_required("customer")
def get_profiles_by_tier(tier):
    try:
        profiles = _get_profile_service().get_profiles_by_membership_tier(tier)
        return list_response([profile_to_dict(p) for p in profiles])
    except ValueError as e:
        return service_error_response(e, "Membership tier lookup")
    except Exception as e:
        return internal_error_response(e, "membership tier lookup")


@customer_profile_bp.route("/top-loyalty", methods=["GET"])
@role_required("customer")
def get_top_loyalty():
    try:
        limit = parse_limit(DEFAULT_TOP_LOYALTY_LIMIT)
        profiles = _get_profile_service().get_top_loyalty_customers(limit)
        return list_response([profile_to_dict(p) for p in profiles])
    except ValueError as e:
        return service_error_response(e, "Top loyalty lookup")
    except Exception as e:
        return internal_error_response(e, "top loyalty lookup")


@customer_profile_bp.route("/<int:profile_id>", methods=["GET"])
@role_required("customer")
def get_profile(profile_id):
    try:
        profile = _get_profile_service().get_profile_by_id(profile_id)
        return _profile_response(profile)
    except ValueError as e:
        return service_error_response(e, "Profile lookup")
    except Exception as e:
        return internal_error_response(e, "profile lookup")


@customer_profile_bp.route("/<int:customer_id>/loyalty-points", methods=["PUT"])
@role_required("customer")
def update_loyalty_points(customer_id):
    """Adjust a customer's balance.

    Expected JSON payload: ``{"points": 100, "action": "add" | "deduct"}``.
    The membership tier in the response is recomputed from the new balance.
    """
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = CustomerProfileValidator.validate_loyalty_points(data)
    if not result.is_valid:
        return validation_error_response(result)

    service = _get_profile_service()
    action = data["action"]
    try:
        if action == "add":
            profile = service.add_loyalty_points(customer_id, data["points"])
        else:
            profile = service.deduct_loyalty_points(customer_id, data["points"])
        return _profile_response(profile, f"Loyalty points {action}ed successfully")
    except ValueError as e:
        return service_error_response(e, "Loyalty points update")
    except Exception as e:
        return internal_error_response(e, "loyalty points update")


@customer_profile_bp.route("/booking-history", methods=["POST"])
@role_required("customer")
def add_booking_history():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = CustomerProfileValidator.validate_booking(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        profile = _get_profile_service().add_booking_history(
            current_user_id(), booking_from_payload(data)
        )
        return _profile_response(
            profile, "Booking history added successfully", status_code=201
        )
    except ValueError as e:
        return service_error_response(e, "Booking history")
    except Exception as e:
        return internal_error_response(e, "booking history")


@customer_profile_bp.route("/preferred-salons/<int:salon_id>", methods=["POST"])
@role_required("customer")
def add_preferred_salon(salon_id):
    try:
        profile = _get_profile_service().add_preferred_salon(current_user_id(), salon_id)
        return _profile_response(profile, "Preferred salon added successfully")
    except ValueError as e:
        return service_error_response(e, "Add preferred salon")
    except Exception as e:
        return internal_error_response(e, "add preferred salon")


@customer_profile_bp.route("/preferred-salons/<int:salon_id>", methods=["DELETE"])
@role_required("customer")
def remove_preferred_salon(salon_id):
    try:
        profile = _get_profile_service().remove_preferred_salon(
            current_user_id(), salon_id
        )
        return _profile_response(profile, "Preferred salon removed successfully")
    except ValueError as e:
        return service_error_response(e, "Remove preferred salon")
    except Exception as e:
        return internal_error_response(e, "remove preferred salon")


@customer_profile_bp.route("/notification-preferences", methods=["PUT"])
@role_required("customer")
def update_notification_preferences():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = CustomerProfileValidator.validate_notification_preferences(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        profile = _get_profile_service().update_notification_preferences(
            current_user_id(), data
        )
        return _profile_response(profile, "Notification preferences updated successfully")
    except ValueError as e:
        return service_error_response(e, "Notification preferences")
    except Exception as e:
        return internal_error_response(e, "notification preferences")


@customer_profile_bp.route("/favorite-services", methods=["POST"])
@role_required("customer")
def add_favorite_service():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = CustomerProfileValidator.validate_favorite_service(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        profile = _get_profile_service().add_favorite_service(
            current_user_id(), data["serviceName"]
        )
        return _profile_response(profile, "Favorite service added successfully")
    except ValueError as e:
        return service_error_response(e, "Add favorite service")
    except Exception as e:
        return internal_error_response(e, "add favorite service")


@customer_profile_bp.route("/favorite-services/<path:service_name>", methods=["DELETE"])
@role_required("customer")
def remove_favorite_service(service_name):
    try:
        profile = _get_profile_service().remove_favorite_service(
            current_user_id(), service_name
        )
        return _profile_response(profile, "Favorite service removed successfully")
    except ValueError as e:
        return service_error_response(e, "Remove favorite service")
    except Exception as e:
        return internal_error_response(e, "remove favorite service")


@customer_profile_bp.route("/emergency-contact", methods=["PUT"])
@role_required("customer")
def update_emergency_contact():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = CustomerProfileValidator.validate_emergency_contact(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        profile = _get_profile_service().update_emergency_contact(current_user_id(), data)
        return _profile_response(profile, "Emergency contact updated successfully")
    except ValueError as e:
        return service_error_response(e, "Emergency contact")
    except Exception as e:
        return internal_error_response(e, "emergency contact")


@customer_profile_bp.route("/deactivate", methods=["PUT"])
@role_required("customer")
def deactivate_profile():
    try:
        profile = _get_profile_service().deactivate_profile(current_user_id())
        return _profile_response(profile, "Profile deactivated successfully")
    except ValueError as e:
        return service_error_response(e, "Profile deactivation")
    except Exception as e:
        return internal_error_response(e, "profile deactivation")


@customer_profile_bp.route("/reactivate", methods=["PUT"])
@role_required("customer")
def reactivate_profile():
    try:
        profile = _get_profile_service().reactivate_profile(current_user_id())
        return _profile_response(profile, "Profile reactivated successfully")
    except ValueError as e:
        return service_error_response(e, "Profile reactivation")
    except Exception as e:
        return internal_error_response(e, "profile reactivation")
