"""
Common API utilities for consistent response formatting across all controllers.
"""

import logging
from typing import Any, Dict, Optional

from flask import jsonify, request

from barberx.core.exceptions import status_code_for
from barberx.core.validation import ValidationResult

logger = logging.getLogger(__name__)


def api_response(
    success: bool,
    message: Optional[str] = None,
    data: Optional[Any] = None,
    status_code: int = 200,
    count: Optional[int] = None,
) -> tuple:
    """
    Standardized success envelope.

    Args:
        success: Whether the operation was successful
        message: Optional human-readable message
        data: Optional data payload
        status_code: HTTP status code
        count: Optional item count for list responses

    Returns:
        Tuple of (json_response, status_code)
    """
    response: Dict[str, Any] = {"success": success}

    if data is not None:
        response["data"] = data
    if message is not None:
        response["message"] = message
    if count is not None:
        response["count"] = count

    return jsonify(response), status_code


def list_response(items: list, message: Optional[str] = None) -> tuple:
    return api_response(True, message=message, data=items, count=len(items))


def error_response(error: str, status_code: int = 400) -> tuple:
    return jsonify({"success": False, "error": error}), status_code


def validation_error_response(result: ValidationResult) -> tuple:
    return (
        jsonify(
            {"success": False, "message": "Validation failed", "errors": result.errors}
        ),
        400,
    )


def service_error_response(error: ValueError, action: str) -> tuple:
    """Translate a business error raised by a service into a JSON error."""
    status_code = status_code_for(error)
    logger.warning(
        f"{action} failed: {error}",
        extra={"context": {"status_code": status_code, "path": request.path}},
    )
    return error_response(str(error), status_code)


def internal_error_response(error: Exception, action: str) -> tuple:
    logger.error(
        f"Unexpected error during {action}: {error}",
        extra={"context": {"path": request.path, "method": request.method}},
        exc_info=True,
    )
    return error_response("Internal server error", 500)


def get_json_body() -> Optional[Dict[str, Any]]:
    """Return the JSON object body, or None when missing/not an object."""
    if not request.is_json:
        return None
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def json_body_required_response() -> tuple:
    return error_response("Content-Type must be application/json with an object body", 400)


def parse_limit(default: int) -> int:
    """Read ``?limit=``; raises ValueError when it is not a positive integer."""
    raw = request.args.get("limit")
    if raw is None or raw == "":
        return default
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError("Limit must be a positive integer")
    if limit <= 0:
        raise ValueError("Limit must be a positive integer")
    return limit
