import dataclasses
import logging
from typing import Any, Dict, List, Optional, Tuple

from barberx.core.exceptions import ConflictError, NotFoundError
from barberx.domain.entities import APPROVAL_STATUSES
from barberx.domain.entities import Salon as DomainSalon
from barberx.domain.geo import distance_meters
from barberx.domain.interfaces import ISalonRepository
from barberx.domain.rules import LISTED, resolve_listing_status

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE_METERS = 5000
MIN_QUERY_LENGTH = 2

# Owners cannot write these through profile updates
PROTECTED_FIELDS = frozenset(
    {"id", "owner_id", "status", "listing_status", "rating_average", "rating_count"}
)


def normalize_service(service: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the known keys of a service entry."""
    return {
        "name": (service.get("name") or "").strip(),
        "price": service.get("price"),
        "duration": service.get("duration"),
        "description": service.get("description"),
    }


class SalonService:
    """Application service for salon profiles.

    Business Rules:
    - An owner has at most one salon
    - A new salon is pending approval and not listed
    - Listing status is derived from the active barber count and is never
      written from request data
    - Public discovery (search, nearby) only returns approved, listed salons
    """

    def __init__(self, repo: ISalonRepository) -> None:
        self.repo = repo

    def create_salon(self, owner_id: int, fields: Dict[str, Any]) -> DomainSalon:
        if self.repo.get_by_owner_id(owner_id) is not None:
            raise ConflictError("Owner already has a salon profile")

        values = self._writable(fields)
        values["services"] = [normalize_service(s) for s in values.get("services", [])]
        salon = DomainSalon(
            owner_id=owner_id,
            listing_status=resolve_listing_status(0),
            **values,
        )
        created = self.repo.create(salon)
        logger.info(
            "Salon created",
            extra={"context": {"salon_id": created.id, "owner_id": owner_id}},
        )
        return created

    def get_salon_by_owner_id(self, owner_id: int) -> DomainSalon:
        salon = self.repo.get_by_owner_id(owner_id)
        if salon is None:
            raise NotFoundError("Salon not found")
        return salon

    def get_salon_by_id(self, salon_id: int) -> DomainSalon:
        salon = self.repo.get_by_id(salon_id)
        if salon is None:
            raise NotFoundError("Salon not found")
        return salon

    def update_salon(self, owner_id: int, fields: Dict[str, Any]) -> DomainSalon:
        return self._update(self.get_salon_by_owner_id(owner_id), fields)

    def update_salon_by_id(self, salon_id: int, fields: Dict[str, Any]) -> DomainSalon:
        return self._update(self.get_salon_by_id(salon_id), fields)

    def delete_salon(self, owner_id: int) -> Dict[str, str]:
        salon = self.get_salon_by_owner_id(owner_id)
        self.repo.delete(salon.id)
        logger.info(
            "Salon deleted", extra={"context": {"salon_id": salon.id, "owner_id": owner_id}}
        )
        return {"message": "Salon deleted successfully"}

    def get_all_salons(
        self, status: Optional[str] = None, listing_status: Optional[str] = None
    ) -> List[DomainSalon]:
        return self.repo.list_salons(status=status, listing_status=listing_status)

    def get_approved_salons(self) -> List[DomainSalon]:
        return self.repo.list_salons(status="approved")

    def get_listed_salons(self) -> List[DomainSalon]:
        """Approved salons that currently have active barbers."""
        return self.repo.list_salons(status="approved", listing_status=LISTED)

    def get_all_listed_salons(self) -> List[DomainSalon]:
        """Listed salons regardless of approval."""
        return self.repo.list_salons(listing_status=LISTED)

    def search_salons(self, query: Optional[str]) -> List[DomainSalon]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise ValueError("Search query must be at least 2 characters long")
        return self.repo.search(query, status="approved", listing_status=LISTED)

    def get_salons_by_location(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        max_distance: float = DEFAULT_MAX_DISTANCE_METERS,
    ) -> List[Tuple[DomainSalon, float]]:
        """Approved, listed salons within ``max_distance`` meters, nearest first."""
        if latitude is None or longitude is None:
            raise ValueError("Latitude and longitude are required")
        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            raise ValueError("Latitude or longitude out of range")

        nearby = []
        for salon in self.get_listed_salons():
            if not salon.has_location:
                continue
            distance = distance_meters(latitude, longitude, salon.latitude, salon.longitude)
            if distance <= max_distance:
                nearby.append((salon, distance))
        nearby.sort(key=lambda pair: pair[1])
        return nearby

    def update_salon_status(self, salon_id: int, status: str) -> DomainSalon:
        if status not in APPROVAL_STATUSES:
            raise ValueError("Status must be one of: pending, approved, rejected")
        salon = self.repo.set_status(salon_id, status)
        if salon is None:
            raise NotFoundError("Salon not found")
        logger.info(
            "Salon status updated",
            extra={"context": {"salon_id": salon_id, "status": status}},
        )
        return salon

    def add_service(self, owner_id: int, service: Dict[str, Any]) -> DomainSalon:
        salon = self.get_salon_by_owner_id(owner_id)
        salon.services.append(normalize_service(service))
        return self.repo.update(salon)

    def update_service(
        self, owner_id: int, index: int, changes: Dict[str, Any]
    ) -> DomainSalon:
        salon = self.get_salon_by_owner_id(owner_id)
        self._check_service_index(salon, index)

        current = salon.services[index]
        for key in ("name", "price", "duration", "description"):
            if key in changes:
                current[key] = changes[key]
        return self.repo.update(salon)

    def remove_service(self, owner_id: int, index: int) -> DomainSalon:
        salon = self.get_salon_by_owner_id(owner_id)
        self._check_service_index(salon, index)

        del salon.services[index]
        return self.repo.update(salon)

    @staticmethod
    def _check_service_index(salon: DomainSalon, index: int) -> None:
        if index < 0 or index >= len(salon.services):
            raise NotFoundError("Service not found")

    @staticmethod
    def _writable(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}

    def _update(self, salon: DomainSalon, fields: Dict[str, Any]) -> DomainSalon:
        values = self._writable(fields)
        if "services" in values:
            values["services"] = [normalize_service(s) for s in values["services"]]
        updated = self.repo.update(dataclasses.replace(salon, **values))
        logger.info("Salon updated", extra={"context": {"salon_id": salon.id}})
        return updated
