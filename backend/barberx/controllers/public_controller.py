"""
Public controller - unauthenticated discovery routes for salons and barbers.
"""

import logging

from flask import Blueprint, request

from barberx.core.api_utils import (
    api_response,
    internal_error_response,
    list_response,
    parse_limit,
    service_error_response,
)
from barberx.db.session import check_database_connection, get_request_session
from barberx.repositories.barber_repo import BarberRepository
from barberx.repositories.salon_repo import SalonRepository
from barberx.schemas.dtos import barber_to_dict, salon_to_dict
from barberx.services.barber_service import DEFAULT_TOP_RATED_LIMIT, BarberService
from barberx.services.salon_service import SalonService

logger = logging.getLogger(__name__)

public_bp = Blueprint("public", __name__, url_prefix="/api/public")


def _get_barber_service() -> BarberService:
    db = get_request_session()
    return BarberService(BarberRepository(db), SalonRepository(db))


def _get_salon_service() -> SalonService:
    return SalonService(SalonRepository(get_request_session()))


@public_bp.route("/health", methods=["GET"])
def health():
    if check_database_connection():
        return {"status": "ok", "db": "connected"}, 200
    return {"status": "error", "db": "disconnected"}, 503


@public_bp.route("/salons", methods=["GET"])
def list_salons():
    """Approved salons that have at least one active barber."""
    try:
        salons = _get_salon_service().get_listed_salons()
        return list_response([salon_to_dict(s) for s in salons])
    except Exception as e:
        return internal_error_response(e, "list public salons")


@public_bp.route("/barbers", methods=["GET"])
def list_barbers():
    try:
        barbers = _get_barber_service().get_all_barbers(request.args.get("specialty"))
        return list_response([barber_to_dict(b) for b in barbers])
    except Exception as e:
        return internal_error_response(e, "list public barbers")


@public_bp.route("/barbers/search", methods=["GET"])
def search_barbers():
    try:
        barbers = _get_barber_service().search_barbers(request.args.get("q"))
        return list_response([barber_to_dict(b) for b in barbers])
    except ValueError as e:
        return service_error_response(e, "Barber search")
    except Exception as e:
        return internal_error_response(e, "barber search")


@public_bp.route("/barbers/specialty/<string:specialty>", methods=["GET"])
def barbers_by_specialty(specialty):
    try:
        barbers = _get_barber_service().get_barbers_by_specialty(specialty)
        return list_response([barber_to_dict(b) for b in barbers])
    except ValueError as e:
        return service_error_response(e, "Barber specialty lookup")
    except Exception as e:
        return internal_error_response(e, "barber specialty lookup")


@public_bp.route("/barbers/top-rated", methods=["GET"])
def top_rated_barbers():
    try:
        limit = parse_limit(DEFAULT_TOP_RATED_LIMIT)
        barbers = _get_barber_service().get_top_rated_barbers(limit)
        return list_response([barber_to_dict(b) for b in barbers])
    except ValueError as e:
        return service_error_response(e, "Top rated barbers")
    except Exception as e:
        return internal_error_response(e, "top rated barbers")


@public_bp.route("/barbers/salon/<int:salon_id>", methods=["GET"])
def barbers_by_salon(salon_id):
    try:
        barbers = _get_barber_service().get_barbers_by_salon_id(salon_id)
        return list_response([barber_to_dict(b) for b in barbers])
    except Exception as e:
        return internal_error_response(e, "list salon barbers")


@public_bp.route("/barbers/<int:barber_id>", methods=["GET"])
def get_barber(barber_id):
    try:
        barber = _get_barber_service().get_barber_by_id(barber_id)
        return api_response(True, data=barber_to_dict(barber))
    except ValueError as e:
        return service_error_response(e, "Barber lookup")
    except Exception as e:
        return internal_error_response(e, "barber lookup")
