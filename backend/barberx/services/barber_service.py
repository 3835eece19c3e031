import dataclasses
import logging
from typing import Any, Dict, List, Optional

from barberx.core.exceptions import NotFoundError, OwnershipError
from barberx.domain.entities import Barber as DomainBarber
from barberx.domain.entities import Salon as DomainSalon
from barberx.domain.interfaces import IBarberRepository, ISalonRepository
from barberx.domain.rules import resolve_listing_status

logger = logging.getLogger(__name__)

DEFAULT_TOP_RATED_LIMIT = 10
MIN_QUERY_LENGTH = 2

# Ownership, activation and ratings are not writable through profile updates
PROTECTED_FIELDS = frozenset(
    {"id", "salon_id", "is_active", "rating_average", "rating_count"}
)


class BarberService:
    """Application service for barber management and discovery.

    Every mutation that can change a salon's active barber count (create,
    soft delete, activate, deactivate) recomputes and stores the salon's
    listing status before returning.
    """

    def __init__(self, repo: IBarberRepository, salon_repo: ISalonRepository) -> None:
        self.repo = repo
        self.salon_repo = salon_repo

    # ----- owner operations -----

    def create_barber(self, owner_id: int, fields: Dict[str, Any]) -> DomainBarber:
        salon = self._get_owner_salon(owner_id)
        values = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}

        barber = self.repo.create(DomainBarber(salon_id=salon.id, **values))
        self.refresh_listing_status(salon.id)
        logger.info(
            "Barber created",
            extra={"context": {"barber_id": barber.id, "salon_id": salon.id}},
        )
        return barber

    def get_barbers_by_owner_id(
        self, owner_id: int, include_inactive: bool = False
    ) -> List[DomainBarber]:
        salon = self.salon_repo.get_by_owner_id(owner_id)
        if salon is None:
            return []
        return self.repo.list_by_salon(salon.id, active_only=not include_inactive)

    def update_barber(
        self, barber_id: int, owner_id: int, fields: Dict[str, Any]
    ) -> DomainBarber:
        barber = self._get_owned_barber(barber_id, owner_id)
        values = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        return self.repo.update(dataclasses.replace(barber, **values))

    def update_barber_availability(
        self, barber_id: int, owner_id: int, availability: List[Dict[str, Any]]
    ) -> DomainBarber:
        barber = self._get_owned_barber(barber_id, owner_id)
        barber.availability = [
            {
                "day": entry["day"],
                "startTime": entry["startTime"],
                "endTime": entry["endTime"],
                "isAvailable": entry.get("isAvailable", True),
            }
            for entry in availability
        ]
        return self.repo.update(barber)

    def delete_barber(self, barber_id: int, owner_id: int) -> Dict[str, str]:
        """Soft delete: the barber is deactivated, not removed."""
        self._set_active(barber_id, owner_id, False)
        return {"message": "Barber deleted successfully"}

    def activate_barber(self, barber_id: int, owner_id: int) -> DomainBarber:
        return self._set_active(barber_id, owner_id, True)

    def deactivate_barber(self, barber_id: int, owner_id: int) -> DomainBarber:
        return self._set_active(barber_id, owner_id, False)

    def get_salon_barber_count(self, owner_id: int) -> Dict[str, Any]:
        salon = self._get_owner_salon(owner_id)
        count = self.repo.count_active_by_salon(salon.id)
        return {
            "salonId": salon.id,
            "salonName": salon.salon_name,
            "barberCount": count,
            "listingStatus": resolve_listing_status(count),
        }

    # ----- public operations -----

    def get_barber_by_id(self, barber_id: int) -> DomainBarber:
        barber = self.repo.get_by_id(barber_id)
        if barber is None:
            raise NotFoundError("Barber not found")
        return barber

    def get_barbers_by_salon_id(self, salon_id: int) -> List[DomainBarber]:
        return self.repo.list_by_salon(salon_id, active_only=True)

    def get_all_barbers(self, specialty: Optional[str] = None) -> List[DomainBarber]:
        return self.repo.list_active(specialty=(specialty or "").strip() or None)

    def search_barbers(self, query: Optional[str]) -> List[DomainBarber]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise ValueError("Search query must be at least 2 characters long")
        return self.repo.search(query)

    def get_barbers_by_specialty(self, specialty: Optional[str]) -> List[DomainBarber]:
        specialty = (specialty or "").strip()
        if len(specialty) < MIN_QUERY_LENGTH:
            raise ValueError("Specialty must be at least 2 characters long")
        return self.repo.list_active(specialty=specialty)

    def get_top_rated_barbers(self, limit: int = DEFAULT_TOP_RATED_LIMIT) -> List[DomainBarber]:
        if limit <= 0:
            raise ValueError("Limit must be a positive integer")
        return self.repo.top_rated(limit)

    # ----- listing status -----

    def refresh_listing_status(self, salon_id: int) -> str:
        """Recompute the salon's listing status from its active barber count."""
        count = self.repo.count_active_by_salon(salon_id)
        listing_status = resolve_listing_status(count)
        self.salon_repo.set_listing_status(salon_id, listing_status)
        logger.info(
            "Salon listing status refreshed",
            extra={
                "context": {
                    "salon_id": salon_id,
                    "active_barbers": count,
                    "listing_status": listing_status,
                }
            },
        )
        return listing_status

    # ----- helpers -----

    def _get_owner_salon(self, owner_id: int) -> DomainSalon:
        salon = self.salon_repo.get_by_owner_id(owner_id)
        if salon is None:
            raise NotFoundError("Salon not found for this owner")
        return salon

    def _get_owned_barber(self, barber_id: int, owner_id: int) -> DomainBarber:
        salon = self._get_owner_salon(owner_id)
        barber = self.repo.get_by_id(barber_id)
        if barber is None or barber.salon_id != salon.id:
            raise OwnershipError("Barber not found or doesn't belong to your salon")
        return barber

    def _set_active(self, barber_id: int, owner_id: int, is_active: bool) -> DomainBarber:
        barber = self._get_owned_barber(barber_id, owner_id)
        updated = self.repo.set_active(barber.id, is_active)
        if updated is None:
            raise NotFoundError("Barber not found")
        self.refresh_listing_status(barber.salon_id)
        logger.info(
            "Barber activation changed",
            extra={"context": {"barber_id": barber.id, "is_active": is_active}},
        )
        return updated
