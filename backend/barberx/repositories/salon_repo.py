import copy
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm.attributes import flag_modified

from barberx.db.base import Salon as DbSalon
from barberx.domain.entities import Salon as DomainSalon
from barberx.domain.interfaces import ISalonRepository
from barberx.repositories import LIKE_ESCAPE, like_pattern

# JSON columns written back on every update
_JSON_FIELDS = ("salon_images", "services", "operating_hours", "amenities")
_SCALAR_FIELDS = (
    "salon_name",
    "address",
    "phone_number",
    "description",
    "profile_picture",
    "rating_average",
    "rating_count",
    "status",
    "listing_status",
    "latitude",
    "longitude",
)


class SalonRepository(ISalonRepository):
    """Repository for salon persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, salon_id: int) -> Optional[DomainSalon]:
        db_salon = self.db.get(DbSalon, salon_id)
        return self._to_domain(db_salon) if db_salon else None

    def get_by_owner_id(self, owner_id: int) -> Optional[DomainSalon]:
        db_salon = self.db.query(DbSalon).filter_by(owner_id=owner_id).first()
        return self._to_domain(db_salon) if db_salon else None

    def list_salons(
        self, status: Optional[str] = None, listing_status: Optional[str] = None
    ) -> List[DomainSalon]:
        query = self._filtered(self.db.query(DbSalon), status, listing_status)
        return [self._to_domain(s) for s in query.order_by(DbSalon.created_at.desc(), DbSalon.id.desc()).all()]

    def search(
        self,
        query: str,
        status: Optional[str] = None,
        listing_status: Optional[str] = None,
    ) -> List[DomainSalon]:
        pattern = like_pattern(query)
        db_query = self.db.query(DbSalon).filter(
            or_(
                DbSalon.salon_name.ilike(pattern, escape=LIKE_ESCAPE),
                DbSalon.address.ilike(pattern, escape=LIKE_ESCAPE),
                DbSalon.description.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        db_query = self._filtered(db_query, status, listing_status)
        return [self._to_domain(s) for s in db_query.order_by(DbSalon.salon_name).all()]

    def create(self, salon: DomainSalon) -> DomainSalon:
        db_salon = DbSalon(owner_id=salon.owner_id)
        self._apply(db_salon, salon)

        self.db.add(db_salon)
        self.db.commit()
        self.db.refresh(db_salon)
        return self._to_domain(db_salon)

    def update(self, salon: DomainSalon) -> DomainSalon:
        if not salon.id:
            raise ValueError("Salon ID is required for update")

        db_salon = self.db.get(DbSalon, salon.id)
        if not db_salon:
            raise ValueError(f"Salon with ID {salon.id} not found")

        self._apply(db_salon, salon)
        self.db.commit()
        self.db.refresh(db_salon)
        return self._to_domain(db_salon)

    def delete(self, salon_id: int) -> bool:
        db_salon = self.db.get(DbSalon, salon_id)
        if not db_salon:
            return False

        # Barbers go with the salon (relationship cascade)
        self.db.delete(db_salon)
        self.db.commit()
        return True

    def set_listing_status(self, salon_id: int, listing_status: str) -> Optional[DomainSalon]:
        db_salon = self.db.get(DbSalon, salon_id)
        if not db_salon:
            return None

        db_salon.listing_status = listing_status
        self.db.commit()
        self.db.refresh(db_salon)
        return self._to_domain(db_salon)

    def set_status(self, salon_id: int, status: str) -> Optional[DomainSalon]:
        db_salon = self.db.get(DbSalon, salon_id)
        if not db_salon:
            return None

        db_salon.status = status
        self.db.commit()
        self.db.refresh(db_salon)
        return self._to_domain(db_salon)

    @staticmethod
    def _filtered(query, status: Optional[str], listing_status: Optional[str]):
        if status:
            query = query.filter(DbSalon.status == status)
        if listing_status:
            query = query.filter(DbSalon.listing_status == listing_status)
        return query

    @staticmethod
    def _apply(db_salon: DbSalon, salon: DomainSalon) -> None:
        for name in _SCALAR_FIELDS:
            setattr(db_salon, name, getattr(salon, name))
        for name in _JSON_FIELDS:
            setattr(db_salon, name, copy.deepcopy(getattr(salon, name)))
            if db_salon.id is not None:
                flag_modified(db_salon, name)

    def _to_domain(self, db_salon: DbSalon) -> DomainSalon:
        """Convert database model to domain entity."""
        return DomainSalon(
            id=db_salon.id,
            owner_id=db_salon.owner_id,
            salon_name=db_salon.salon_name,
            address=db_salon.address,
            phone_number=db_salon.phone_number,
            description=db_salon.description,
            profile_picture=db_salon.profile_picture,
            salon_images=copy.deepcopy(db_salon.salon_images or []),
            services=copy.deepcopy(db_salon.services or []),
            operating_hours=copy.deepcopy(db_salon.operating_hours or []),
            amenities=copy.deepcopy(db_salon.amenities or []),
            rating_average=db_salon.rating_average or 0.0,
            rating_count=db_salon.rating_count or 0,
            status=db_salon.status,
            listing_status=db_salon.listing_status,
            latitude=db_salon.latitude,
            longitude=db_salon.longitude,
            created_at=db_salon.created_at,
            updated_at=db_salon.updated_at,
        )
