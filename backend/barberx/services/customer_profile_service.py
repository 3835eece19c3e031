import dataclasses
import logging
from typing import Any, Dict, List, Optional

from barberx.core import config
from barberx.core.exceptions import ConflictError, NotFoundError
from barberx.domain.entities import MEMBERSHIP_TIERS
from barberx.domain.entities import CustomerProfile as DomainProfile
from barberx.domain.entities import default_notifications
from barberx.domain.interfaces import ICustomerProfileRepository
from barberx.domain.rules import resolve_membership_tier

logger = logging.getLogger(__name__)

DEFAULT_TOP_LOYALTY_LIMIT = 10
MIN_QUERY_LENGTH = 2

# Loyalty state and ownership only change through dedicated operations
PROTECTED_FIELDS = frozenset(
    {"id", "customer_id", "loyalty_points", "membership_tier", "booking_history", "is_active"}
)


class CustomerProfileService:
    """Application service for customer profiles and loyalty accounts.

    Business Rules:
    - A customer has at most one profile
    - The membership tier is recomputed on every loyalty balance change
    - Deductions are not floor-clamped; a negative balance resolves to bronze
    - A completed booking credits LOYALTY_POINTS_PER_COMPLETED_BOOKING points
    """

    def __init__(self, repo: ICustomerProfileRepository) -> None:
        self.repo = repo

    def create_profile(self, customer_id: int, fields: Dict[str, Any]) -> DomainProfile:
        if self.repo.get_by_customer_id(customer_id) is not None:
            raise ConflictError("Customer already has a profile")

        values = self._writable(fields)
        preferences = values.pop("preferences", None) or {}
        profile = DomainProfile(customer_id=customer_id, **values)
        profile.preferences = self._merge_preferences(profile.preferences, preferences)

        created = self.repo.create(profile)
        logger.info(
            "Customer profile created",
            extra={"context": {"profile_id": created.id, "customer_id": customer_id}},
        )
        return created

    def get_profile_by_customer_id(self, customer_id: int) -> DomainProfile:
        profile = self.repo.get_by_customer_id(customer_id)
        if profile is None:
            raise NotFoundError("Customer profile not found")
        return profile

    def get_profile_by_id(self, profile_id: int) -> DomainProfile:
        profile = self.repo.get_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Customer profile not found")
        return profile

    def update_profile(self, customer_id: int, fields: Dict[str, Any]) -> DomainProfile:
        return self._update(self.get_profile_by_customer_id(customer_id), fields)

    def update_profile_by_id(self, profile_id: int, fields: Dict[str, Any]) -> DomainProfile:
        return self._update(self.get_profile_by_id(profile_id), fields)

    def delete_profile(self, customer_id: int) -> Dict[str, str]:
        profile = self.get_profile_by_customer_id(customer_id)
        self.repo.delete(profile.id)
        logger.info(
            "Customer profile deleted",
            extra={"context": {"profile_id": profile.id, "customer_id": customer_id}},
        )
        return {"message": "Customer profile deleted successfully"}

    # ----- queries -----

    def get_all_profiles(
        self, membership_tier: Optional[str] = None, is_active: Optional[bool] = None
    ) -> List[DomainProfile]:
        if membership_tier is not None:
            self._check_tier(membership_tier)
        return self.repo.list_profiles(membership_tier=membership_tier, is_active=is_active)

    def get_active_profiles(self) -> List[DomainProfile]:
        return self.repo.list_profiles(is_active=True)

    def search_profiles(self, query: Optional[str]) -> List[DomainProfile]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise ValueError("Search query must be at least 2 characters long")
        return self.repo.search(query)

    def get_profiles_by_membership_tier(self, tier: str) -> List[DomainProfile]:
        self._check_tier(tier)
        return self.repo.list_profiles(membership_tier=tier, is_active=True)

    def get_top_loyalty_customers(
        self, limit: int = DEFAULT_TOP_LOYALTY_LIMIT
    ) -> List[DomainProfile]:
        if limit <= 0:
            raise ValueError("Limit must be a positive integer")
        return self.repo.top_loyalty(limit)

    # ----- loyalty -----

    def add_loyalty_points(self, customer_id: int, points: int) -> DomainProfile:
        self._check_points(points)
        return self._apply_points_delta(customer_id, points)

    def deduct_loyalty_points(self, customer_id: int, points: int) -> DomainProfile:
        """Deduct points. The balance may go negative."""
        self._check_points(points)
        return self._apply_points_delta(customer_id, -points)

    def add_booking_history(self, customer_id: int, booking: Dict[str, Any]) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        entry = {
            "salonId": booking["salonId"],
            "serviceId": booking["serviceId"],
            "date": booking["date"],
            "status": booking["status"],
        }
        for key in ("rating", "review"):
            if booking.get(key) is not None:
                entry[key] = booking[key]
        profile.booking_history.append(entry)

        if entry["status"] == "completed":
            self._credit(profile, config.LOYALTY_POINTS_PER_COMPLETED_BOOKING)

        return self.repo.update(profile)

    # ----- preferences -----

    def add_preferred_salon(self, customer_id: int, salon_id: int) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        salons = profile.preferences.setdefault("preferredSalons", [])
        if salon_id not in salons:
            salons.append(salon_id)
        return self.repo.update(profile)

    def remove_preferred_salon(self, customer_id: int, salon_id: int) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        salons = profile.preferences.get("preferredSalons", [])
        profile.preferences["preferredSalons"] = [s for s in salons if s != salon_id]
        return self.repo.update(profile)

    def update_notification_preferences(
        self, customer_id: int, notifications: Dict[str, bool]
    ) -> DomainProfile:
        """Merge the given flags into the current notification settings."""
        profile = self.get_profile_by_customer_id(customer_id)
        current = profile.preferences.get("notifications") or default_notifications()
        current.update(
            {k: v for k, v in notifications.items() if k in ("email", "sms", "push")}
        )
        profile.preferences["notifications"] = current
        return self.repo.update(profile)

    def add_favorite_service(self, customer_id: int, service_name: str) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        favorites = profile.preferences.setdefault("favoriteServices", [])
        service_name = service_name.strip()
        if service_name not in favorites:
            favorites.append(service_name)
        return self.repo.update(profile)

    def remove_favorite_service(self, customer_id: int, service_name: str) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        favorites = profile.preferences.get("favoriteServices", [])
        profile.preferences["favoriteServices"] = [s for s in favorites if s != service_name]
        return self.repo.update(profile)

    def update_emergency_contact(
        self, customer_id: int, contact: Dict[str, Any]
    ) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        profile.emergency_contact = {
            "name": contact.get("name"),
            "phoneNumber": contact.get("phoneNumber"),
            "relationship": contact.get("relationship"),
        }
        return self.repo.update(profile)

    def deactivate_profile(self, customer_id: int) -> DomainProfile:
        return self._set_active(customer_id, False)

    def reactivate_profile(self, customer_id: int) -> DomainProfile:
        return self._set_active(customer_id, True)

    # ----- helpers -----

    @staticmethod
    def _writable(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}

    @staticmethod
    def _check_points(points: int) -> None:
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            raise ValueError("Points must be a positive number")

    @staticmethod
    def _check_tier(tier: str) -> None:
        if tier not in MEMBERSHIP_TIERS:
            raise ValueError("Membership tier must be one of: bronze, silver, gold, platinum")

    @staticmethod
    def _credit(profile: DomainProfile, delta: int) -> None:
        profile.loyalty_points += delta
        profile.membership_tier = resolve_membership_tier(profile.loyalty_points)

    @staticmethod
    def _merge_preferences(
        current: Dict[str, Any], changes: Dict[str, Any]
    ) -> Dict[str, Any]:
        merged = dict(current)
        for key, value in changes.items():
            if key == "notifications" and isinstance(value, dict):
                notifications = dict(merged.get("notifications") or default_notifications())
                notifications.update(value)
                merged["notifications"] = notifications
            else:
                merged[key] = value
        return merged

    def _apply_points_delta(self, customer_id: int, delta: int) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        previous_tier = profile.membership_tier
        self._credit(profile, delta)
        updated = self.repo.update(profile)
        logger.info(
            "Loyalty points updated",
            extra={
                "context": {
                    "customer_id": customer_id,
                    "delta": delta,
                    "balance": updated.loyalty_points,
                    "previous_tier": previous_tier,
                    "tier": updated.membership_tier,
                }
            },
        )
        return updated

    def _update(self, profile: DomainProfile, fields: Dict[str, Any]) -> DomainProfile:
        values = self._writable(fields)
        if "preferences" in values:
            values["preferences"] = self._merge_preferences(
                profile.preferences, values["preferences"] or {}
            )
        updated = self.repo.update(dataclasses.replace(profile, **values))
        logger.info("Customer profile updated", extra={"context": {"profile_id": profile.id}})
        return updated

    def _set_active(self, customer_id: int, is_active: bool) -> DomainProfile:
        profile = self.get_profile_by_customer_id(customer_id)
        profile.is_active = is_active
        return self.repo.update(profile)
