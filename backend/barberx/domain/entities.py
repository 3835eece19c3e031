"""
Domain entities - Pure business logic, no framework dependencies.

Nested document parts (services, operating hours, availability, address,
preferences, booking history, emergency contact) are kept as plain dicts in
their JSON shape.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

ROLES = ("customer", "owner")
APPROVAL_STATUSES = ("pending", "approved", "rejected")
LISTING_STATUSES = ("listed", "notListed")
MEMBERSHIP_TIERS = ("bronze", "silver", "gold", "platinum")


def default_notifications() -> Dict[str, bool]:
    return {"email": True, "sms": False, "push": True}


def default_preferences() -> Dict[str, Any]:
    return {
        "favoriteServices": [],
        "preferredSalons": [],
        "notifications": default_notifications(),
    }


@dataclass
class User:
    """Domain entity representing an account (customer or salon owner)."""

    id: Optional[int] = None
    name: str = ""
    email: str = ""
    role: str = "customer"
    password_hash: Optional[str] = field(default=None, repr=False)
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    # Approval status is only meaningful for owners
    status: Optional[str] = None
    reset_password_token: Optional[str] = field(default=None, repr=False)
    reset_password_expires: Optional[datetime] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.name or not self.name.strip():
            raise ValueError("Name is required")
        if not self.email or "@" not in self.email:
            raise ValueError("Valid email is required")
        if self.role not in ROLES:
            raise ValueError(f"Role must be one of: {', '.join(ROLES)}")
        if self.status is not None and self.status not in APPROVAL_STATUSES:
            raise ValueError("Invalid account status")


@dataclass
class Salon:
    """Domain entity for a salon profile. One salon per owner."""

    owner_id: int = 0
    salon_name: str = ""
    address: str = ""
    phone_number: str = ""
    id: Optional[int] = None
    description: Optional[str] = None
    profile_picture: Optional[str] = None
    salon_images: List[str] = field(default_factory=list)
    services: List[Dict[str, Any]] = field(default_factory=list)
    operating_hours: List[Dict[str, Any]] = field(default_factory=list)
    amenities: List[str] = field(default_factory=list)
    rating_average: float = 0.0
    rating_count: int = 0
    status: str = "pending"
    listing_status: str = "notListed"
    # WGS84 degrees; both set or both None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.owner_id <= 0:
            raise ValueError("Valid owner_id is required")
        if not self.salon_name or not self.salon_name.strip():
            raise ValueError("Salon name is required")
        if self.status not in APPROVAL_STATUSES:
            raise ValueError("Invalid salon status")
        if self.listing_status not in LISTING_STATUSES:
            raise ValueError("Invalid listing status")
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("Latitude and longitude must be set together")

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass
class Barber:
    """Domain entity for a barber working at a salon."""

    salon_id: int = 0
    name: str = ""
    id: Optional[int] = None
    specialties: List[str] = field(default_factory=list)
    experience: float = 0
    profile_picture: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    rating_average: float = 0.0
    rating_count: int = 0
    availability: List[Dict[str, Any]] = field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.salon_id <= 0:
            raise ValueError("Valid salon_id is required")
        if not self.name or not self.name.strip():
            raise ValueError("Barber name is required")
        if self.experience < 0:
            raise ValueError("Experience cannot be negative")


@dataclass
class CustomerProfile:
    """Domain entity for a customer's profile and loyalty account.

    ``membership_tier`` is derived from ``loyalty_points``; services
    recompute it whenever the balance changes.
    """

    customer_id: int = 0
    first_name: str = ""
    last_name: str = ""
    id: Optional[int] = None
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    profile_picture: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    preferences: Dict[str, Any] = field(default_factory=default_preferences)
    booking_history: List[Dict[str, Any]] = field(default_factory=list)
    loyalty_points: int = 0
    membership_tier: str = "bronze"
    emergency_contact: Optional[Dict[str, Any]] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.customer_id <= 0:
            raise ValueError("Valid customer_id is required")
        if not self.first_name or not self.last_name:
            raise ValueError("First and last name are required")
        if self.membership_tier not in MEMBERSHIP_TIERS:
            raise ValueError("Invalid membership tier")
