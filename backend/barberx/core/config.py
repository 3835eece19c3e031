"""
Centralized configuration module for application-wide settings.

Every setting is read from the environment through a getter function and
exposed as a module-level constant, so tests can set environment variables
before the first import.
"""

import logging
import os

logger = logging.getLogger(__name__)


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower().strip() in ("true", "1", "yes")


# ===========================
# Environment
# ===========================


def get_environment() -> str:
    """Return the deployment environment name (FLASK_ENV)."""
    return os.getenv("FLASK_ENV", "development")


def is_production() -> bool:
    return get_environment() == "production"


def is_testing() -> bool:
    """True when running under pytest or with TESTING set."""
    if _get_bool("TESTING", ""):
        return True
    return bool(os.getenv("PYTEST_CURRENT_TEST"))


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///./barberx.db")


# ===========================
# Authentication Configuration
# ===========================


def get_jwt_expiration_hours() -> int:
    """
    Get the access token lifetime in hours.

    Environment Variables:
        JWT_EXPIRATION_HOURS: positive integer, default 24
    """
    raw = os.getenv("JWT_EXPIRATION_HOURS", "24")
    try:
        hours = int(raw)
    except ValueError:
        logger.warning(
            "Invalid JWT_EXPIRATION_HOURS, falling back to 24",
            extra={"context": {"value": raw}},
        )
        return 24
    return hours if hours > 0 else 24


def get_password_reset_ttl_seconds() -> int:
    """
    Get how long a password reset token stays valid.

    Environment Variables:
        PASSWORD_RESET_TTL_SECONDS: default 3600 (one hour)
    """
    raw = os.getenv("PASSWORD_RESET_TTL_SECONDS", "3600")
    try:
        return max(int(raw), 1)
    except ValueError:
        logger.warning(
            "Invalid PASSWORD_RESET_TTL_SECONDS, falling back to 3600",
            extra={"context": {"value": raw}},
        )
        return 3600


JWT_EXPIRATION_HOURS = get_jwt_expiration_hours()
PASSWORD_RESET_TTL_SECONDS = get_password_reset_ttl_seconds()


def log_auth_config():
    """Log the active token lifetimes at startup."""
    logger.info(
        "Authentication configuration initialized",
        extra={
            "context": {
                "jwt_expiration_hours": JWT_EXPIRATION_HOURS,
                "password_reset_ttl_seconds": PASSWORD_RESET_TTL_SECONDS,
            }
        },
    )


# ===========================
# Loyalty Configuration
# ===========================


def get_points_per_completed_booking() -> int:
    """
    Get the number of loyalty points credited for a completed booking.

    Environment Variables:
        LOYALTY_POINTS_PER_COMPLETED_BOOKING: default 10
    """
    raw = os.getenv("LOYALTY_POINTS_PER_COMPLETED_BOOKING", "10")
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Invalid LOYALTY_POINTS_PER_COMPLETED_BOOKING, falling back to 10",
            extra={"context": {"value": raw}},
        )
        return 10


LOYALTY_POINTS_PER_COMPLETED_BOOKING = get_points_per_completed_booking()


def log_loyalty_config():
    logger.info(
        "Loyalty configuration initialized",
        extra={
            "context": {
                "points_per_completed_booking": LOYALTY_POINTS_PER_COMPLETED_BOOKING
            }
        },
    )


# ===========================
# Rate Limiting / Logging
# ===========================


def is_rate_limit_enabled() -> bool:
    return os.getenv("RATE_LIMIT_ENABLED", "1") != "0"


def get_limiter_storage_uri() -> str:
    return os.getenv("LIMITER_STORAGE_URI", "memory://")


def is_log_to_file_enabled() -> bool:
    return os.getenv("LOG_TO_FILE", "1") == "1"
