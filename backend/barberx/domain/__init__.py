"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with their invariants
- interfaces.py: Repository contracts
- rules.py: Membership tier and salon listing resolvers
- geo.py: Distance helper for nearby salon search
"""

from .entities import Barber, CustomerProfile, Salon, User
from .interfaces import (
    IBarberReader,
    IBarberRepository,
    IBarberWriter,
    ICustomerProfileReader,
    ICustomerProfileRepository,
    ICustomerProfileWriter,
    ISalonReader,
    ISalonRepository,
    ISalonWriter,
    IUserReader,
    IUserRepository,
    IUserWriter,
)
from .rules import resolve_listing_status, resolve_membership_tier

__all__ = [
    # Domain entities
    "User",
    "Salon",
    "Barber",
    "CustomerProfile",
    # Repository interfaces
    "IUserRepository",
    "ISalonRepository",
    "IBarberRepository",
    "ICustomerProfileRepository",
    # Segregated interfaces
    "IUserReader",
    "IUserWriter",
    "ISalonReader",
    "ISalonWriter",
    "IBarberReader",
    "IBarberWriter",
    "ICustomerProfileReader",
    "ICustomerProfileWriter",
    # Rules
    "resolve_membership_tier",
    "resolve_listing_status",
]
