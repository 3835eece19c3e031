import copy
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm.attributes import flag_modified

from barberx.db.base import Barber as DbBarber
from barberx.domain.entities import Barber as DomainBarber
from barberx.domain.interfaces import IBarberRepository

_FIELDS = (
    "name",
    "experience",
    "profile_picture",
    "phone_number",
    "email",
    "bio",
    "rating_average",
    "rating_count",
    "is_active",
)
_JSON_FIELDS = ("specialties", "availability")


def _has_specialty(barber: DomainBarber, needle: str) -> bool:
    needle = needle.lower()
    return any(needle in str(s).lower() for s in barber.specialties)


class BarberRepository(IBarberRepository):
    """Repository for barber persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, barber_id: int) -> Optional[DomainBarber]:
        db_barber = self.db.get(DbBarber, barber_id)
        return self._to_domain(db_barber) if db_barber else None

    def list_by_salon(self, salon_id: int, active_only: bool = True) -> List[DomainBarber]:
        query = self.db.query(DbBarber).filter(DbBarber.salon_id == salon_id)
        if active_only:
            query = query.filter(DbBarber.is_active.is_(True))
        return [self._to_domain(b) for b in query.order_by(DbBarber.name).all()]

    def list_active(self, specialty: Optional[str] = None) -> List[DomainBarber]:
        rows = (
            self.db.query(DbBarber)
            .filter(DbBarber.is_active.is_(True))
            .order_by(DbBarber.name)
            .all()
        )
        barbers = [self._to_domain(b) for b in rows]
        if specialty:
            # Matched per element: the serialized JSON text is not searchable
            # for non-ASCII values
            barbers = [b for b in barbers if _has_specialty(b, specialty)]
        return barbers

    def search(self, query: str) -> List[DomainBarber]:
        needle = query.lower()
        return [
            b
            for b in self.list_active()
            if needle in b.name.lower()
            or needle in (b.bio or "").lower()
            or _has_specialty(b, query)
        ]

    def top_rated(self, limit: int) -> List[DomainBarber]:
        rows = (
            self.db.query(DbBarber)
            .filter(DbBarber.is_active.is_(True))
            .order_by(
                DbBarber.rating_average.desc(),
                DbBarber.rating_count.desc(),
                DbBarber.id,
            )
            .limit(limit)
            .all()
        )
        return [self._to_domain(b) for b in rows]

    def count_active_by_salon(self, salon_id: int) -> int:
        return (
            self.db.query(func.count(DbBarber.id))
            .filter(DbBarber.salon_id == salon_id, DbBarber.is_active.is_(True))
            .scalar()
            or 0
        )

    def create(self, barber: DomainBarber) -> DomainBarber:
        db_barber = DbBarber(salon_id=barber.salon_id)
        self._apply(db_barber, barber)

        self.db.add(db_barber)
        self.db.commit()
        self.db.refresh(db_barber)
        return self._to_domain(db_barber)

    def update(self, barber: DomainBarber) -> DomainBarber:
        if not barber.id:
            raise ValueError("Barber ID is required for update")

        db_barber = self.db.get(DbBarber, barber.id)
        if not db_barber:
            raise ValueError(f"Barber with ID {barber.id} not found")

        self._apply(db_barber, barber)
        self.db.commit()
        self.db.refresh(db_barber)
        return self._to_domain(db_barber)

    def set_active(self, barber_id: int, is_active: bool) -> Optional[DomainBarber]:
        db_barber = self.db.get(DbBarber, barber_id)
        if not db_barber:
            return None

        db_barber.is_active = is_active
        self.db.commit()
        self.db.refresh(db_barber)
        return self._to_domain(db_barber)

    @staticmethod
    def _apply(db_barber: DbBarber, barber: DomainBarber) -> None:
        for name in _FIELDS:
            setattr(db_barber, name, getattr(barber, name))
        for name in _JSON_FIELDS:
            setattr(db_barber, name, copy.deepcopy(getattr(barber, name)))
            if db_barber.id is not None:
                flag_modified(db_barber, name)

    def _to_domain(self, db_barber: DbBarber) -> DomainBarber:
        """Convert database model to domain entity."""
        return DomainBarber(
            id=db_barber.id,
            salon_id=db_barber.salon_id,
            name=db_barber.name,
            specialties=copy.deepcopy(db_barber.specialties or []),
            experience=db_barber.experience or 0,
            profile_picture=db_barber.profile_picture,
            phone_number=db_barber.phone_number,
            email=db_barber.email,
            bio=db_barber.bio,
            rating_average=db_barber.rating_average or 0.0,
            rating_count=db_barber.rating_count or 0,
            availability=copy.deepcopy(db_barber.availability or []),
            is_active=db_barber.is_active,
            created_at=db_barber.created_at,
            updated_at=db_barber.updated_at,
        )
