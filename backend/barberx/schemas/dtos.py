"""
Data Transfer Objects (DTOs) for the BarberX API.

Request payloads arrive in camelCase and are mapped to the snake_case field
names the services work with. Response DTOs are built from domain entities
and serialized back to camelCase.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from barberx.core.validation import parse_iso_datetime
from barberx.domain.entities import Barber, CustomerProfile, Salon


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _pick(data: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    """Rename the camelCase keys present in ``data``; absent keys are skipped."""
    return {target: data[source] for source, target in mapping.items() if source in data}


_SALON_FIELDS = {
    "salonName": "salon_name",
    "address": "address",
    "phoneNumber": "phone_number",
    "description": "description",
    "profilePicture": "profile_picture",
    "salonImages": "salon_images",
    "services": "services",
    "operatingHours": "operating_hours",
    "amenities": "amenities",
}

_BARBER_FIELDS = {
    "name": "name",
    "specialties": "specialties",
    "experience": "experience",
    "profilePicture": "profile_picture",
    "phoneNumber": "phone_number",
    "email": "email",
    "bio": "bio",
    "availability": "availability",
}

_PROFILE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "phoneNumber": "phone_number",
    "dateOfBirth": "date_of_birth",
    "gender": "gender",
    "profilePicture": "profile_picture",
    "address": "address",
    "preferences": "preferences",
    "emergencyContact": "emergency_contact",
}


def salon_fields_from_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map a salon payload; ``location.coordinates`` is ``[lng, lat]``."""
    fields = _pick(data, _SALON_FIELDS)
    for key in ("salon_name", "address"):
        if isinstance(fields.get(key), str):
            fields[key] = fields[key].strip()

    if "operating_hours" in fields:
        fields["operating_hours"] = [
            {
                "day": entry["day"],
                "openTime": entry["openTime"],
                "closeTime": entry["closeTime"],
                "isClosed": bool(entry.get("isClosed", False)),
            }
            for entry in fields["operating_hours"] or []
        ]

    location = data.get("location")
    if isinstance(location, dict) and location.get("coordinates"):
        longitude, latitude = location["coordinates"]
        fields["longitude"] = float(longitude)
        fields["latitude"] = float(latitude)
    elif "location" in data and location is None:
        fields["longitude"] = None
        fields["latitude"] = None
    return fields


def barber_fields_from_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    fields = _pick(data, _BARBER_FIELDS)
    if isinstance(fields.get("name"), str):
        fields["name"] = fields["name"].strip()
    if isinstance(fields.get("email"), str):
        fields["email"] = fields["email"].strip().lower()
    if "availability" in fields:
        fields["availability"] = [
            {
                "day": entry["day"],
                "startTime": entry["startTime"],
                "endTime": entry["endTime"],
                "isAvailable": entry.get("isAvailable", True),
            }
            for entry in fields["availability"] or []
        ]
    return fields


def profile_fields_from_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    fields = _pick(data, _PROFILE_FIELDS)
    for key in ("first_name", "last_name"):
        if isinstance(fields.get(key), str):
            fields[key] = fields[key].strip()

    if "date_of_birth" in fields:
        parsed = parse_iso_datetime(fields["date_of_birth"])
        fields["date_of_birth"] = parsed.date() if parsed else None

    address = fields.get("address")
    if isinstance(address, dict):
        fields["address"] = {
            "street": address.get("street"),
            "city": address.get("city"),
            "state": address.get("state"),
            "zipCode": address.get("zipCode"),
            "country": address.get("country") or "US",
        }

    contact = fields.get("emergency_contact")
    if isinstance(contact, dict):
        fields["emergency_contact"] = {
            "name": contact.get("name"),
            "phoneNumber": contact.get("phoneNumber"),
            "relationship": contact.get("relationship"),
        }
    return fields


def booking_from_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a booking history entry; the date is stored as ISO text."""
    booking = {
        "salonId": data["salonId"],
        "serviceId": data["serviceId"],
        "date": parse_iso_datetime(data["date"]).isoformat(),
        "status": data["status"],
    }
    if data.get("rating") is not None:
        booking["rating"] = data["rating"]
    if data.get("review") is not None:
        booking["review"] = data["review"]
    return booking


@dataclass
class SalonResponse:
    """DTO for salon API responses."""

    id: int
    owner_id: int
    salon_name: str
    address: str
    phone_number: str
    description: Optional[str]
    profile_picture: Optional[str]
    salon_images: List[str]
    services: List[Dict[str, Any]]
    operating_hours: List[Dict[str, Any]]
    amenities: List[str]
    rating_average: float
    rating_count: int
    status: str
    listing_status: str
    latitude: Optional[float]
    longitude: Optional[float]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    distance: Optional[float] = None

    @classmethod
    def from_domain(cls, salon: Salon, distance: Optional[float] = None) -> "SalonResponse":
        """Create response from domain entity."""
        return cls(
            id=salon.id,
            owner_id=salon.owner_id,
            salon_name=salon.salon_name,
            address=salon.address,
            phone_number=salon.phone_number,
            description=salon.description,
            profile_picture=salon.profile_picture,
            salon_images=salon.salon_images,
            services=salon.services,
            operating_hours=salon.operating_hours,
            amenities=salon.amenities,
            rating_average=salon.rating_average,
            rating_count=salon.rating_count,
            status=salon.status,
            listing_status=salon.listing_status,
            latitude=salon.latitude,
            longitude=salon.longitude,
            created_at=salon.created_at,
            updated_at=salon.updated_at,
            distance=distance,
        )

    def to_dict(self) -> Dict[str, Any]:
        location = None
        if self.latitude is not None and self.longitude is not None:
            location = {"type": "Point", "coordinates": [self.longitude, self.latitude]}

        result = {
            "id": self.id,
            "ownerId": self.owner_id,
            "salonName": self.salon_name,
            "address": self.address,
            "phoneNumber": self.phone_number,
            "description": self.description,
            "profilePicture": self.profile_picture,
            "salonImages": self.salon_images,
            "services": self.services,
            "operatingHours": self.operating_hours,
            "amenities": self.amenities,
            "ratings": {"average": self.rating_average, "count": self.rating_count},
            "status": self.status,
            "listingStatus": self.listing_status,
            "location": location,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
        if self.distance is not None:
            result["distance"] = round(self.distance, 1)
        return result


@dataclass
class BarberResponse:
    """DTO for barber API responses."""

    id: int
    salon_id: int
    name: str
    specialties: List[str]
    experience: float
    profile_picture: Optional[str]
    phone_number: Optional[str]
    email: Optional[str]
    bio: Optional[str]
    rating_average: float
    rating_count: int
    availability: List[Dict[str, Any]]
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, barber: Barber) -> "BarberResponse":
        return cls(
            id=barber.id,
            salon_id=barber.salon_id,
            name=barber.name,
            specialties=barber.specialties,
            experience=barber.experience,
            profile_picture=barber.profile_picture,
            phone_number=barber.phone_number,
            email=barber.email,
            bio=barber.bio,
            rating_average=barber.rating_average,
            rating_count=barber.rating_count,
            availability=barber.availability,
            is_active=barber.is_active,
            created_at=barber.created_at,
            updated_at=barber.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "salonId": self.salon_id,
            "name": self.name,
            "specialties": self.specialties,
            "experience": self.experience,
            "profilePicture": self.profile_picture,
            "phoneNumber": self.phone_number,
            "email": self.email,
            "bio": self.bio,
            "rating": {"average": self.rating_average, "count": self.rating_count},
            "availability": self.availability,
            "isActive": self.is_active,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class CustomerProfileResponse:
    """DTO for customer profile API responses."""

    id: int
    customer_id: int
    first_name: str
    last_name: str
    phone_number: Optional[str]
    date_of_birth: Optional[date]
    gender: Optional[str]
    profile_picture: Optional[str]
    address: Optional[Dict[str, Any]]
    preferences: Dict[str, Any]
    booking_history: List[Dict[str, Any]] = field(default_factory=list)
    loyalty_points: int = 0
    membership_tier: str = "bronze"
    emergency_contact: Optional[Dict[str, Any]] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, profile: CustomerProfile) -> "CustomerProfileResponse":
        return cls(
            id=profile.id,
            customer_id=profile.customer_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone_number=profile.phone_number,
            date_of_birth=profile.date_of_birth,
            gender=profile.gender,
            profile_picture=profile.profile_picture,
            address=profile.address,
            preferences=profile.preferences,
            booking_history=profile.booking_history,
            loyalty_points=profile.loyalty_points,
            membership_tier=profile.membership_tier,
            emergency_contact=profile.emergency_contact,
            is_active=profile.is_active,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "customerId": self.customer_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
            "dateOfBirth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "gender": self.gender,
            "profilePicture": self.profile_picture,
            "address": self.address,
            "preferences": self.preferences,
            "bookingHistory": self.booking_history,
            "loyaltyPoints": self.loyalty_points,
            "membershipTier": self.membership_tier,
            "emergencyContact": self.emergency_contact,
            "isActive": self.is_active,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


def salon_to_dict(salon: Salon, distance: Optional[float] = None) -> Dict[str, Any]:
    return SalonResponse.from_domain(salon, distance).to_dict()


def barber_to_dict(barber: Barber) -> Dict[str, Any]:
    return BarberResponse.from_domain(barber).to_dict()


def profile_to_dict(profile: CustomerProfile) -> Dict[str, Any]:
    return CustomerProfileResponse.from_domain(profile).to_dict()
