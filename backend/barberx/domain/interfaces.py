"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from .entities import Barber, CustomerProfile, Salon, User


class IUserReader(ABC):
    """Interface for account read operations."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Get account by email (case-insensitive)."""
        pass

    @abstractmethod
    def get_by_reset_token(self, token: str) -> Optional[User]:
        """Get account holding the given password reset token."""
        pass


class IUserWriter(ABC):
    """Interface for account write operations."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Create a new account."""
        pass

    @abstractmethod
    def set_reset_token(self, user_id: int, token: str, expires: datetime) -> bool:
        """Store a password reset token and its expiry."""
        pass

    @abstractmethod
    def update_password(self, user_id: int, password_hash: str) -> bool:
        """Replace the password hash and clear any reset token."""
        pass


class IUserRepository(IUserReader, IUserWriter):
    """Complete account repository interface."""

    pass


class ISalonReader(ABC):
    """Interface for salon read operations."""

    @abstractmethod
    def get_by_id(self, salon_id: int) -> Optional[Salon]:
        pass

    @abstractmethod
    def get_by_owner_id(self, owner_id: int) -> Optional[Salon]:
        pass

    @abstractmethod
    def list_salons(
        self, status: Optional[str] = None, listing_status: Optional[str] = None
    ) -> List[Salon]:
        """List salons, optionally filtered by approval and listing status."""
        pass

    @abstractmethod
    def search(
        self,
        query: str,
        status: Optional[str] = None,
        listing_status: Optional[str] = None,
    ) -> List[Salon]:
        """Case-insensitive match on name, address or description."""
        pass


class ISalonWriter(ABC):
    """Interface for salon write operations."""

    @abstractmethod
    def create(self, salon: Salon) -> Salon:
        pass

    @abstractmethod
    def update(self, salon: Salon) -> Salon:
        """Persist every mutable field of ``salon``."""
        pass

    @abstractmethod
    def delete(self, salon_id: int) -> bool:
        """Delete a salon together with its barbers."""
        pass

    @abstractmethod
    def set_listing_status(self, salon_id: int, listing_status: str) -> Optional[Salon]:
        pass

    @abstractmethod
    def set_status(self, salon_id: int, status: str) -> Optional[Salon]:
        pass


class ISalonRepository(ISalonReader, ISalonWriter):
    """Complete salon repository interface."""

    pass


class IBarberReader(ABC):
    """Interface for barber read operations."""

    @abstractmethod
    def get_by_id(self, barber_id: int) -> Optional[Barber]:
        pass

    @abstractmethod
    def list_by_salon(self, salon_id: int, active_only: bool = True) -> List[Barber]:
        pass

    @abstractmethod
    def list_active(self, specialty: Optional[str] = None) -> List[Barber]:
        """Active barbers, optionally those with a matching specialty."""
        pass

    @abstractmethod
    def search(self, query: str) -> List[Barber]:
        """Active barbers matching name, specialties or bio."""
        pass

    @abstractmethod
    def top_rated(self, limit: int) -> List[Barber]:
        pass

    @abstractmethod
    def count_active_by_salon(self, salon_id: int) -> int:
        pass


class IBarberWriter(ABC):
    """Interface for barber write operations."""

    @abstractmethod
    def create(self, barber: Barber) -> Barber:
        pass

    @abstractmethod
    def update(self, barber: Barber) -> Barber:
        pass

    @abstractmethod
    def set_active(self, barber_id: int, is_active: bool) -> Optional[Barber]:
        pass


class IBarberRepository(IBarberReader, IBarberWriter):
    """Complete barber repository interface."""

    pass


class ICustomerProfileReader(ABC):
    """Interface for customer profile read operations."""

    @abstractmethod
    def get_by_id(self, profile_id: int) -> Optional[CustomerProfile]:
        pass

    @abstractmethod
    def get_by_customer_id(self, customer_id: int) -> Optional[CustomerProfile]:
        pass

    @abstractmethod
    def list_profiles(
        self,
        membership_tier: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> List[CustomerProfile]:
        pass

    @abstractmethod
    def search(self, query: str) -> List[CustomerProfile]:
        """Active profiles matching name, phone number or city."""
        pass

    @abstractmethod
    def top_loyalty(self, limit: int) -> List[CustomerProfile]:
        pass


class ICustomerProfileWriter(ABC):
    """Interface for customer profile write operations."""

    @abstractmethod
    def create(self, profile: CustomerProfile) -> CustomerProfile:
        pass

    @abstractmethod
    def update(self, profile: CustomerProfile) -> CustomerProfile:
        pass

    @abstractmethod
    def delete(self, profile_id: int) -> bool:
        pass


class ICustomerProfileRepository(ICustomerProfileReader, ICustomerProfileWriter):
    """Complete customer profile repository interface."""

    pass
