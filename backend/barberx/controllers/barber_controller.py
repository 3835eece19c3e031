"""
Barber controller - barber management for salon owners.

Creating, deleting, activating and deactivating a barber refreshes the
salon's listing status; the response reflects the barber only.
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
from barberx.core.validation import BarberValidator
from barberx.db.session import get_request_session
from barberx.repositories.barber_repo import BarberRepository
from barberx.repositories.salon_repo import SalonRepository
from barberx.schemas.dtos import barber_fields_from_payload, barber_to_dict
from barberx.services.barber_service import BarberService

logger = logging.getLogger(__name__)

barber_bp = Blueprint("barber", __name__, url_prefix="/api/owner/barber")


def _get_barber_service() -> BarberService:
    """Dependency injection factory for BarberService."""
    db = get_request_session()
    return BarberService(BarberRepository(db), SalonRepository(db))


@barber_bp.route("", methods=["POST"])
@role_required("owner")
def create_barber():
    """Add a barber to the caller's salon.

    Expected JSON payload:
    {
        "name": "Sam Blade",
        "specialties": ["fade", "beard"],
        "experience": 4,
        "availability": [
            {"day": "Monday", "startTime": "09:00", "endTime": "17:00"}
        ]
    }
    """
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = BarberValidator.validate_create(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        barber = _get_barber_service().create_barber(
            current_user_id(), barber_fields_from_payload(data)
        )
        return api_response(
            True,
            message="Barber created successfully",
            data=barber_to_dict(barber),
            status_code=201,
        )
    except ValueError as e:
        return service_error_response(e, "Barber creation")
    except Exception as e:
        return internal_error_response(e, "barber creation")


@barber_bp.route("/my-barbers", methods=["GET"])
@role_required("owner")
def get_my_barbers():
    """Active barbers of the caller's salon; ``?includeInactive=true`` adds the rest."""
    include_inactive = request.args.get("includeInactive", "").lower() == "true"
    try:
        barbers = _get_barber_service().get_barbers_by_owner_id(
            current_user_id(), include_inactive=include_inactive
        )
        return list_response([barber_to_dict(b) for b in barbers])
    except Exception as e:
        return internal_error_response(e, "list owner barbers")


@barber_bp.route("/barber-count", methods=["GET"])
@role_required("owner")
def get_barber_count():
    try:
        summary = _get_barber_service().get_salon_barber_count(current_user_id())
        return api_response(True, data=summary)
    except ValueError as e:
        return service_error_response(e, "Barber count")
    except Exception as e:
        return internal_error_response(e, "barber count")


@barber_bp.route("/<int:barber_id>", methods=["GET"])
@role_required("owner")
def get_barber(barber_id):
    try:
        barber = _get_barber_service().get_barber_by_id(barber_id)
        return api_response(True, data=barber_to_dict(barber))
    except ValueError as e:
        return service_error_response(e, "Barber lookup")
    except Exception as e:
        return internal_error_response(e, "barber lookup")


@barber_bp.route("/<int:barber_id>", methods=["PUT"])
@role_required("owner")
def update_barber(barber_id):
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = BarberValidator.validate_update(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        barber = _get_barber_service().update_barber(
            barber_id, current_user_id(), barber_fields_from_payload(data)
        )
        return api_response(
            True, message="Barber updated successfully", data=barber_to_dict(barber)
        )
    except ValueError as e:
        return service_error_response(e, "Barber update")
    except Exception as e:
        return internal_error_response(e, "barber update")


@barber_bp.route("/<int:barber_id>", methods=["DELETE"])
@role_required("owner")
def delete_barber(barber_id):
    try:
        outcome = _get_barber_service().delete_barber(barber_id, current_user_id())
        return api_response(True, message=outcome["message"])
    except ValueError as e:
        return service_error_response(e, "Barber deletion")
    except Exception as e:
        return internal_error_response(e, "barber deletion")


@barber_bp.route("/<int:barber_id>/availability", methods=["PUT"])
@role_required("owner")
def update_availability(barber_id):
    data = get_json_body()
    if data is None:
        return json_body_required_response()

    result = BarberValidator.validate_availability(data)
    if not result.is_valid:
        return validation_error_response(result)

    try:
        barber = _get_barber_service().update_barber_availability(
            barber_id, current_user_id(), data["availability"]
        )
        return api_response(
            True,
            message="Barber availability updated successfully",
            data=barber_to_dict(barber),
        )
    except ValueError as e:
        return service_error_response(e, "Availability update")
    except Exception as e:
        return internal_error_response(e, "availability update")


@barber_bp.route("/<int:barber_id>/activate", methods=["PUT"])
@role_required("owner")
def activate_barber(barber_id):
    try:
        barber = _get_barber_service().activate_barber(barber_id, current_user_id())
        return api_response(
            True, message="Barber activated successfully", data=barber_to_dict(barber)
        )
    except ValueError as e:
        return service_error_response(e, "Barber activation")
    except Exception as e:
        return internal_error_response(e, "barber activation")


@barber_bp.route("/<int:barber_id>/deactivate", methods=["PUT"])
@role_required("owner")
def deactivate_barber(barber_id):
    try:
        barber = _get_barber_service().deactivate_barber(barber_id, current_user_id())
        return api_response(
            True, message="Barber deactivated successfully", data=barber_to_dict(barber)
        )
    except ValueError as e:
        return service_error_response(e, "Barber deactivation")
    except Exception as e:
        return internal_error_response(e, "barber deactivation")
