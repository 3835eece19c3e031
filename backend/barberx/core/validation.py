"""
Common validation utilities for BarberX controllers.

Each validator returns a ValidationResult; controllers answer a failed
result with 400 and ``{"success": false, "message": "Validation failed",
"errors": [...]}``.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

VALID_DAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]
SALON_STATUSES = ["pending", "approved", "rejected"]
GENDERS = ["male", "female", "other", "prefer_not_to_say"]
BOOKING_STATUSES = ["completed", "cancelled", "no_show"]
MEMBERSHIP_TIERS = ["bronze", "silver", "gold", "platinum"]
LOYALTY_ACTIONS = ["add", "deduct"]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")


class ValidationResult:
    """Container for validation results."""

    def __init__(self):
        self.errors: List[str] = []
        self.is_valid: bool = True

    def add_error(self, message: str, field: Optional[str] = None):
        """Add validation error."""
        self.errors.append(message)
        self.is_valid = False
        logger.debug(
            f"Validation error: {message}", extra={"context": {"field": field}}
        )


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime string; None when invalid."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class BaseValidator:
    """Base validator with common field checks."""

    @staticmethod
    def is_number(value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    @staticmethod
    def is_text(value: Any, min_length: int = 0) -> bool:
        return isinstance(value, str) and len(value.strip()) >= min_length

    @staticmethod
    def validate_positive_number(
        value: Any, field_name: str, message: str, result: ValidationResult
    ) -> None:
        if not BaseValidator.is_number(value) or value <= 0:
            result.add_error(message, field_name)

    @staticmethod
    def validate_array(
        data: Dict[str, Any], key: str, label: str, result: ValidationResult
    ) -> bool:
        """Flag ``key`` when present but not a list; explicit null included."""
        if key in data and not isinstance(data[key], list):
            result.add_error(f"{label} must be an array", key)
            return False
        return True

    @staticmethod
    def validate_object(
        data: Dict[str, Any], key: str, label: str, result: ValidationResult
    ) -> bool:
        if key in data and not isinstance(data[key], dict):
            result.add_error(f"{label} must be an object", key)
            return False
        return True

    @staticmethod
    def validate_schedule(
        entries: Any,
        label: str,
        start_key: str,
        end_key: str,
        times_message: str,
        result: ValidationResult,
    ) -> None:
        """Validate day/start/end entries of operating hours or availability."""
        if not isinstance(entries, list):
            return
        for index, entry in enumerate(entries, start=1):
            entry = entry if isinstance(entry, dict) else {}
            if entry.get("day") not in VALID_DAYS:
                result.add_error(f"{label} {index}: Invalid day", "day")
            if not entry.get(start_key) or not entry.get(end_key):
                result.add_error(f"{label} {index}: {times_message}", start_key)


class AuthValidator(BaseValidator):
    @classmethod
    def validate_signup(cls, data: Dict[str, Any], role: str) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("name"), 2):
            result.add_error("Name is required and must be at least 2 characters long", "name")
        email = data.get("email")
        if not isinstance(email, str) or not EMAIL_PATTERN.match(email.strip()):
            result.add_error("A valid email is required", "email")
        if not cls.is_text(data.get("password"), 6):
            result.add_error("Password must be at least 6 characters long", "password")
        if role == "owner" and not cls.is_text(data.get("phoneNumber"), 1):
            result.add_error("Phone number is required", "phoneNumber")
        return result

    @classmethod
    def validate_login(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("email"), 1):
            result.add_error("Email is required", "email")
        if not cls.is_text(data.get("password"), 1):
            result.add_error("Password is required", "password")
        return result

    @classmethod
    def validate_reset_password(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("token"), 1):
            result.add_error("Reset token is required", "token")
        if not cls.is_text(data.get("newPassword"), 6):
            result.add_error(
                "New password must be at least 6 characters long", "newPassword"
            )
        return result


class SalonValidator(BaseValidator):
    @classmethod
    def validate_create(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if not cls.is_text(data.get("salonName"), 2):
            result.add_error(
                "Salon name is required and must be at least 2 characters long",
                "salonName",
            )
        if not cls.is_text(data.get("address"), 5):
            result.add_error(
                "Address is required and must be at least 5 characters long",
                "address",
            )
        if not cls.is_text(data.get("phoneNumber"), 1):
            result.add_error("Phone number is required", "phoneNumber")

        cls._validate_collections(data, result)
        services = data.get("services")
        if isinstance(services, list):
            for index, service in enumerate(services, start=1):
                service = service if isinstance(service, dict) else {}
                if not cls.is_text(service.get("name"), 1):
                    result.add_error(f"Service {index}: Name is required", "services")
                cls.validate_positive_number(
                    service.get("price"),
                    "services",
                    f"Service {index}: Valid price is required",
                    result,
                )
                cls.validate_positive_number(
                    service.get("duration"),
                    "services",
                    f"Service {index}: Valid duration is required",
                    result,
                )

        cls.validate_schedule(
            data.get("operatingHours"),
            "Operating hours",
            "openTime",
            "closeTime",
            "Open and close times are required",
            result,
        )
        cls._validate_location(data.get("location"), result)
        return result

    @classmethod
    def validate_update(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if "salonName" in data and not cls.is_text(data["salonName"], 2):
            result.add_error("Salon name must be at least 2 characters long", "salonName")
        if "address" in data and not cls.is_text(data["address"], 5):
            result.add_error("Address must be at least 5 characters long", "address")
        if "phoneNumber" in data and not isinstance(data["phoneNumber"], str):
            result.add_error("Phone number must be a string", "phoneNumber")

        cls._validate_collections(data, result)
        services = data.get("services")
        if isinstance(services, list):
            for index, service in enumerate(services, start=1):
                if not isinstance(service, dict):
                    result.add_error(f"Service {index}: Must be an object", "services")
                    continue
                if "name" in service and not isinstance(service["name"], str):
                    result.add_error(f"Service {index}: Name must be a string", "services")
                if "price" in service:
                    cls.validate_positive_number(
                        service["price"],
                        "services",
                        f"Service {index}: Price must be a positive number",
                        result,
                    )
                if "duration" in service:
                    cls.validate_positive_number(
                        service["duration"],
                        "services",
                        f"Service {index}: Duration must be a positive number",
                        result,
                    )

        cls.validate_schedule(
            data.get("operatingHours"),
            "Operating hours",
            "openTime",
            "closeTime",
            "Open and close times are required",
            result,
        )
        cls._validate_location(data.get("location"), result)
        return result

    @classmethod
    def validate_service(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("name"), 2):
            result.add_error(
                "Service name is required and must be at least 2 characters long",
                "name",
            )
        cls.validate_positive_number(
            data.get("price"),
            "price",
            "Service price is required and must be a positive number",
            result,
        )
        cls.validate_positive_number(
            data.get("duration"),
            "duration",
            "Service duration is required and must be a positive number",
            result,
        )
        return result

    @staticmethod
    def validate_status(data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if data.get("status") not in SALON_STATUSES:
            result.add_error(
                "Status must be one of: pending, approved, rejected", "status"
            )
        return result

    @classmethod
    def _validate_collections(cls, data: Dict[str, Any], result: ValidationResult) -> None:
        cls.validate_array(data, "services", "Services", result)
        cls.validate_array(data, "operatingHours", "Operating hours", result)
        cls.validate_array(data, "salonImages", "Salon images", result)
        cls.validate_array(data, "amenities", "Amenities", result)

    @classmethod
    def _validate_location(cls, location: Any, result: ValidationResult) -> None:
        # null clears the location
        if location is None:
            return
        if not isinstance(location, dict):
            result.add_error("Location must be an object", "location")
            return
        if "coordinates" not in location:
            return
        coordinates = location["coordinates"]
        if (
            not isinstance(coordinates, list)
            or len(coordinates) != 2
            or not all(cls.is_number(c) for c in coordinates)
        ):
            result.add_error(
                "Location coordinates must be an array of [longitude, latitude]",
                "location",
            )


class BarberValidator(BaseValidator):
    @classmethod
    def validate_create(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("name"), 2):
            result.add_error(
                "Barber name is required and must be at least 2 characters long",
                "name",
            )
        cls._validate_common(data, result)
        return result

    @classmethod
    def validate_update(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if "name" in data and not cls.is_text(data["name"], 2):
            result.add_error("Barber name must be at least 2 characters long", "name")
        cls._validate_common(data, result)
        return result

    @classmethod
    def validate_availability(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        availability = data.get("availability")
        if not isinstance(availability, list):
            result.add_error("Availability must be an array", "availability")
            return result

        cls.validate_schedule(
            availability,
            "Availability",
            "startTime",
            "endTime",
            "Start and end times are required",
            result,
        )
        for index, entry in enumerate(availability, start=1):
            if not isinstance(entry, dict) or not isinstance(
                entry.get("isAvailable"), bool
            ):
                result.add_error(
                    f"Availability {index}: isAvailable must be a boolean",
                    "isAvailable",
                )
        return result

    @classmethod
    def _validate_common(cls, data: Dict[str, Any], result: ValidationResult) -> None:
        if "experience" in data and (
            not cls.is_number(data["experience"]) or data["experience"] < 0
        ):
            result.add_error("Experience must be a positive number", "experience")
        email = data.get("email")
        if email and (not isinstance(email, str) or not EMAIL_PATTERN.match(email)):
            result.add_error("Invalid email format", "email")
        cls.validate_array(data, "specialties", "Specialties", result)
        if cls.validate_array(data, "availability", "Availability", result):
            cls.validate_schedule(
                data.get("availability"),
                "Availability",
                "startTime",
                "endTime",
                "Start and end times are required",
                result,
            )


class CustomerProfileValidator(BaseValidator):
    @classmethod
    def validate_create(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("firstName"), 2):
            result.add_error(
                "First name is required and must be at least 2 characters long",
                "firstName",
            )
        if not cls.is_text(data.get("lastName"), 2):
            result.add_error(
                "Last name is required and must be at least 2 characters long",
                "lastName",
            )
        cls._validate_personal_fields(data, result)
        cls._validate_nested(data, result)
        return result

    @classmethod
    def validate_update(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if "firstName" in data and not cls.is_text(data["firstName"], 2):
            result.add_error("First name must be at least 2 characters long", "firstName")
        if "lastName" in data and not cls.is_text(data["lastName"], 2):
            result.add_error("Last name must be at least 2 characters long", "lastName")
        cls._validate_personal_fields(data, result)
        cls._validate_nested(data, result)
        return result

    @classmethod
    def validate_booking(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls._is_reference(data.get("salonId")):
            result.add_error("Salon ID is required", "salonId")
        if not cls._is_reference(data.get("serviceId")):
            result.add_error("Service ID is required", "serviceId")
        if parse_iso_datetime(data.get("date")) is None:
            result.add_error("Valid booking date is required", "date")
        if data.get("status") not in BOOKING_STATUSES:
            result.add_error(
                "Status must be one of: completed, cancelled, no_show", "status"
            )
        if "rating" in data and data["rating"] is not None:
            rating = data["rating"]
            if not cls.is_number(rating) or rating < 1 or rating > 5:
                result.add_error("Rating must be a number between 1 and 5", "rating")
        if "review" in data and data["review"] is not None and not isinstance(
            data["review"], str
        ):
            result.add_error("Review must be a string", "review")
        return result

    @classmethod
    def validate_notification_preferences(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        cls._validate_notification_flags(data, result)
        return result

    @classmethod
    def validate_favorite_service(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("serviceName"), 2):
            result.add_error(
                "Service name is required and must be at least 2 characters long",
                "serviceName",
            )
        return result

    @classmethod
    def validate_emergency_contact(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not cls.is_text(data.get("name"), 1):
            result.add_error("Emergency contact name is required", "name")
        if not cls.is_text(data.get("phoneNumber"), 1):
            result.add_error("Emergency contact phone number is required", "phoneNumber")
        cls._validate_emergency_contact(data, result)
        return result

    @classmethod
    def validate_loyalty_points(cls, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        cls.validate_positive_number(
            data.get("points"), "points", "Points must be a positive number", result
        )
        if data.get("action") not in LOYALTY_ACTIONS:
            result.add_error('Action must be either "add" or "deduct"', "action")
        return result

    @staticmethod
    def validate_search_params(data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        tier = data.get("membershipTier")
        if tier is not None and tier not in MEMBERSHIP_TIERS:
            result.add_error(
                "Membership tier must be one of: bronze, silver, gold, platinum",
                "membershipTier",
            )
        is_active = data.get("isActive")
        if is_active is not None and is_active not in ("true", "false"):
            result.add_error("isActive must be a boolean", "isActive")
        return result

    @classmethod
    def _validate_personal_fields(cls, data: Dict[str, Any], result: ValidationResult) -> None:
        if data.get("phoneNumber") is not None and not isinstance(
            data["phoneNumber"], str
        ):
            result.add_error("Phone number must be a string", "phoneNumber")
        if data.get("dateOfBirth") and parse_iso_datetime(data["dateOfBirth"]) is None:
            result.add_error("Date of birth must be a valid date", "dateOfBirth")
        if data.get("gender") and data["gender"] not in GENDERS:
            result.add_error(
                "Gender must be one of: male, female, other, prefer_not_to_say",
                "gender",
            )
        address = data.get("address")
        if isinstance(address, dict) and address.get("zipCode"):
            if not ZIP_CODE_PATTERN.match(str(address["zipCode"])):
                result.add_error(
                    "ZIP code must be in format 12345 or 12345-6789", "zipCode"
                )

    @classmethod
    def _validate_nested(cls, data: Dict[str, Any], result: ValidationResult) -> None:
        cls.validate_object(data, "address", "Address", result)
        if cls.validate_object(data, "emergencyContact", "Emergency contact", result):
            contact = data.get("emergencyContact")
            if isinstance(contact, dict):
                cls._validate_emergency_contact(contact, result)

        if not cls.validate_object(data, "preferences", "Preferences", result):
            return
        preferences = data.get("preferences") or {}
        if cls.validate_object(
            preferences, "notifications", "Notification preferences", result
        ) and isinstance(preferences.get("notifications"), dict):
            cls._validate_notification_flags(preferences["notifications"], result)
        cls.validate_array(preferences, "favoriteServices", "Favorite services", result)
        cls.validate_array(preferences, "preferredSalons", "Preferred salons", result)

    @staticmethod
    def _validate_notification_flags(
        notifications: Dict[str, Any], result: ValidationResult
    ) -> None:
        labels = {"email": "Email", "sms": "SMS", "push": "Push"}
        for key, label in labels.items():
            if key in notifications and not isinstance(notifications[key], bool):
                result.add_error(
                    f"{label} notification preference must be a boolean", key
                )

    @staticmethod
    def _validate_emergency_contact(contact: Dict[str, Any], result: ValidationResult) -> None:
        labels = {
            "name": "name",
            "phoneNumber": "phone number",
            "relationship": "relationship",
        }
        for key, label in labels.items():
            value = contact.get(key)
            if value is not None and not isinstance(value, str):
                result.add_error(f"Emergency contact {label} must be a string", key)

    @staticmethod
    def _is_reference(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, str) and bool(value.strip())
