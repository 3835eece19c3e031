"""
Schemas package - Data Transfer Objects.

This package maps camelCase API payloads to service fields and serializes
domain entities back into the API contract.
"""

from .dtos import (
    BarberResponse,
    CustomerProfileResponse,
    SalonResponse,
    barber_fields_from_payload,
    barber_to_dict,
    booking_from_payload,
    profile_fields_from_payload,
    profile_to_dict,
    salon_fields_from_payload,
    salon_to_dict,
)

__all__ = [
    # Request mapping
    "salon_fields_from_payload",
    "barber_fields_from_payload",
    "profile_fields_from_payload",
    "booking_from_payload",
    # Response DTOs
    "SalonResponse",
    "BarberResponse",
    "CustomerProfileResponse",
    "salon_to_dict",
    "barber_to_dict",
    "profile_to_dict",
]
