"""
Custom exceptions for the application.

Services raise these; controllers translate them into JSON error responses
using ``status_code``. They subclass ValueError so a plain
``except ValueError`` still treats them as client errors.
"""


class BarberxError(ValueError):
    """Base class for business errors that map to an HTTP status."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BarberxError):
    """Raised when the requested record does not exist."""

    status_code = 404


class ConflictError(BarberxError):
    """Raised when a uniqueness rule would be broken (duplicate email, second salon)."""

    status_code = 409


class OwnershipError(BarberxError):
    """Raised when an owner touches a barber outside their salon."""

    status_code = 403


class AuthenticationError(BarberxError):
    status_code = 401


def status_code_for(error: Exception) -> int:
    """Return the HTTP status for a service error (400 for plain ValueError)."""
    return getattr(error, "status_code", 400)
