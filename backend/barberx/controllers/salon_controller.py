"""
Salon controller - salon profile management for owners.

Every route requires an owner bearer token. The owner's own salon is
addressed through ``/my-salon``; the listing routes expose all salons to
owners for review.
"""

import logging

from flask import Blueprint, request

from barberx.core.api_utils import (
    api_response,
    get_json_body,
    internal_error_response,
    json_body_required_response,
    list_response,
    service_error_response,
    validation_error_response,
)
from barberx.core.auth_decorators import current_user_id, role_required
from barberx.core.validation import SalonValidator
from barberx.db.session import get_request_session
from barberx.repositories.salon_repo import SalonRepository
from barberx.schemas.dtos import salon_fields_from_payload, salon_to_dict
from barberx.services.salon_service import DEFAULT_MAX_DISTANCE_METERS, SalonService

logger = logging.getLogger(__name__)

salon_bp = Blueprint("salon", __name__, url_prefix="/api/salon")


def _get_salon_service() -> SalonService:
    """Dependency injection factory for SalonService."""
    return SalonService(SalonRepository(get_request_session()))


def _query_float(name: str):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number")


@salon_bp.route("", methods=["POST"])
@role_required("owner")
def create_salon():
    """Create the caller's salon profile.

    Expected JSON payload:
    {
        "salonName": "Fade Factory",
        "address": "12 Main Street",
        "phoneNumber": "555-0100",
        "services": [{"name": "Cut", "price": 25, "duration": 30}],
        "location": {"type": "Point", "coordinates": [-73.98, 40.75]}
    }
    """
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = SalonValidator.validate_create(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        salon = _get_salon_service().create_salon(
            current_user_id(), salon_fields_from_payload(data)
        )
        return api_response(
            True,
            message="Salon created successfully",
            data=salon_to_dict(salon),
            status_code=201,
        )
    except ValueError as e:
        return service_error_response(e, "Salon creation")
    except Exception as e:
        return internal_error_response(e, "salon creation")


@salon_bp.route("/my-salon", methods=["GET"])
@role_required("owner")
def get_my_salon():
    try:
        salon = _get_salon_service().get_salon_by_owner_id(current_user_id())
        return api_response(True, data=salon_to_dict(salon))
    except ValueError as e:
        return service_error_response(e, "Salon lookup")
    except Exception as e:
        return internal_error_response(e, "salon lookup")


@salon_bp.route("/my-salon", methods=["PUT"])
@role_required("owner")
def update_my_salon():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = SalonValidator.validate_update(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        salon = _get_salon_service().update_salon(
            current_user_id(), salon_fields_from_payload(data)
        )
        return api_response(
            True, message="Salon updated successfully", data=salon_to_dict(salon)
        )
    except ValueError as e:
        return service_error_response(e, "Salon update")
    except Exception as e:
        return internal_error_response(e, "salon update")


@salon_bp.route("/my-salon", methods=["DELETE"])
@role_required("owner")
def delete_my_salon():
    try:
        outcome = _get_salon_service().delete_salon(current_user_id())
        return api_response(True, message=outcome["message"])
    except ValueError as e:
        return service_error_response(e, "Salon deletion")
    except Exception as e:
        return internal_error_response(e, "salon deletion")


@salon_bp.route("/all", methods=["GET"])
@role_required("owner")
def get_all_salons():
    """All salons, optionally filtered by ``status`` and ``listingStatus``."""
    try:
        salons = _get_salon_service().get_all_salons(
            status=request.args.get("status"),
            listing_status=request.args.get("listingStatus"),
        )
        return list_response([salon_to_dict(s) for s in salons])
    except Exception as e:
        return internal_error_response(e, "list salons")


@salon_bp.route("/approved", methods=["GET"])
@role_required("owner")
def get_approved_salons():
    try:
        salons = _get_salon_service().get_approved_salons()
        return list_response([salon_to_dict(s) for s in salons])
    except Exception as e:
        return internal_error_response(e, "list approved salons")


@salon_bp.route("/listed", methods=["GET"])
@role_required("owner")
def get_listed_salons():
    try:
        salons = _get_salon_service().get_listed_salons()
        return list_response([salon_to_dict(s) for s in salons])
    except Exception as e:
        return internal_error_response(e, "list listed salons")


@salon_bp.route("/all-listed", methods=["GET"])
@role_required("owner")
def get_all_listed_salons():
    try:
        salons = _get_salon_service().get_all_listed_salons()
        return list_response([salon_to_dict(s) for s in salons])
    except Exception as e:
        return internal_error_response(e, "list all listed salons")


@salon_bp.route("/search", methods=["GET"])
@role_required("owner")
def search_salons():
    try:
        salons = _get_salon_service().search_salons(request.args.get("q"))
        return list_response([salon_to_dict(s) for s in salons])
    except ValueError as e:
        return service_error_response(e, "Salon search")
    except Exception as e:
        return internal_error_response(e, "salon search")


@salon_bp.route("/nearby", methods=["GET"])
@role_required("owner")
def get_nearby_salons():
    """Listed salons within ``maxDistance`` meters of ``latitude``/``longitude``."""
    try:
        latitude = _query_float("latitude")
        longitude = _query_float("longitude")
        max_distance = _query_float("maxDistance")
        if max_distance is None:
            max_distance = DEFAULT_MAX_DISTANCE_METERS
        elif max_distance <= 0:
            raise ValueError("maxDistance must be a positive number")

        nearby = _get_salon_service().get_salons_by_location(
            latitude, longitude, max_distance
        )
        return list_response([salon_to_dict(s, distance) for s, distance in nearby])
    except ValueError as e:
        return service_error_response(e, "Nearby salon search")
    except Exception as e:
        return internal_error_response(e, "nearby salon search")


@salon_bp.route("/<int:salon_id>", methods=["GET"])
@role_required("owner")
def get_salon(salon_id):
    try:
        salon = _get_salon_service().get_salon_by_id(salon_id)
        return api_response(True, data=salon_to_dict(salon))
    except ValueError as e:
        return service_error_response(e, "Salon lookup")
    except Exception as e:
        return internal_error_response(e, "salon lookup")


@salon_bp.route("/<int:salon_id>/status", methods=["PUT"])
@role_required("owner")
def update_salon_status(salon_id):
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = SalonValidator.validate_status(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        salon = _get_salon_service().update_salon_status(salon_id, data["status"])
        return api_response(
            True, message="Salon status updated successfully", data=salon_to_dict(salon)
        )
    except ValueError as e:
        return service_error_response(e, "Salon status update")
    except Exception as e:
        return internal_error_response(e, "salon status update")


@salon_bp.route("/services", methods=["POST"])
@role_required("owner")
def add_service():
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = SalonValidator.validate_service(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        salon = _get_salon_service().add_service(current_user_id(), data)
        return api_response(
            True,
            message="Service added successfully",
            data=salon_to_dict(salon),
            status_code=201,
        )
    except ValueError as e:
        return service_error_response(e, "Add service")
    except Exception as e:
        return internal_error_response(e, "add service")


@salon_bp.route("/services/<int:index>", methods=["PUT"])
@role_required("owner")
def update_service(index):
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = SalonValidator.validate_service(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        salon = _get_salon_service().update_service(current_user_id(), index, data)
        return api_response(
            True, message="Service updated successfully", data=salon_to_dict(salon)
        )
    except ValueError as e:
        return service_error_response(e, "Update service")
    except Exception as e:
        return internal_error_response(e, "update service")


@salon_bp.route("/services/<int:index>", methods=["DELETE"])
@role_required("owner")
def remove_service(index):
    try:
        salon = _get_salon_service().remove_service(current_user_id(), index)
        return api_response(
            True, message="Service removed successfully", data=salon_to_dict(salon)
        )
    except ValueError as e:
        return service_error_response(e, "Remove service")
    except Exception as e:
        return internal_error_response(e, "remove service")
