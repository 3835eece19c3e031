import copy
from typing import List, Optional

from sqlalchemy import String, cast, or_
from sqlalchemy.orm.attributes import flag_modified

from barberx.db.base import CustomerProfile as DbProfile
from barberx.domain.entities import CustomerProfile as DomainProfile
from barberx.domain.entities import default_preferences
from barberx.domain.interfaces import ICustomerProfileRepository
from barberx.repositories import LIKE_ESCAPE, like_pattern

_FIELDS = (
    "first_name",
    "last_name",
    "phone_number",
    "date_of_birth",
    "gender",
    "profile_picture",
    "loyalty_points",
    "membership_tier",
    "is_active",
)
_JSON_FIELDS = ("address", "preferences", "booking_history", "emergency_contact")


class CustomerProfileRepository(ICustomerProfileRepository):
    """Repository for customer profile persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, profile_id: int) -> Optional[DomainProfile]:
        db_profile = self.db.get(DbProfile, profile_id)
        return self._to_domain(db_profile) if db_profile else None

    def get_by_customer_id(self, customer_id: int) -> Optional[DomainProfile]:
        db_profile = self.db.query(DbProfile).filter_by(customer_id=customer_id).first()
        return self._to_domain(db_profile) if db_profile else None

    def list_profiles(
        self,
        membership_tier: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> List[DomainProfile]:
        query = self.db.query(DbProfile)
        if membership_tier:
            query = query.filter(DbProfile.membership_tier == membership_tier)
        if is_active is not None:
            query = query.filter(DbProfile.is_active.is_(is_active))
        rows = query.order_by(DbProfile.loyalty_points.desc(), DbProfile.id).all()
        return [self._to_domain(p) for p in rows]

    def search(self, query: str) -> List[DomainProfile]:
        pattern = like_pattern(query)
        rows = (
            self.db.query(DbProfile)
            .filter(DbProfile.is_active.is_(True))
            .filter(
                or_(
                    DbProfile.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                    DbProfile.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                    DbProfile.phone_number.ilike(pattern, escape=LIKE_ESCAPE),
                    cast(DbProfile.address, String).ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(DbProfile.last_name, DbProfile.first_name)
            .all()
        )
        needle = query.lower()
        profiles = [self._to_domain(p) for p in rows]
        # The address column also matched on street/state; keep city hits only
        return [
            p
            for p in profiles
            if needle in p.first_name.lower()
            or needle in p.last_name.lower()
            or needle in (p.phone_number or "").lower()
            or needle in str((p.address or {}).get("city") or "").lower()
        ]

    def top_loyalty(self, limit: int) -> List[DomainProfile]:
        rows = (
            self.db.query(DbProfile)
            .filter(DbProfile.is_active.is_(True))
            .order_by(DbProfile.loyalty_points.desc(), DbProfile.id)
            .limit(limit)
            .all()
        )
        return [self._to_domain(p) for p in rows]

    def create(self, profile: DomainProfile) -> DomainProfile:
        db_profile = DbProfile(customer_id=profile.customer_id)
        self._apply(db_profile, profile)

        self.db.add(db_profile)
        self.db.commit()
        self.db.refresh(db_profile)
        return self._to_domain(db_profile)

    def update(self, profile: DomainProfile) -> DomainProfile:
        if not profile.id:
            raise ValueError("Profile ID is required for update")

        db_profile = self.db.get(DbProfile, profile.id)
        if not db_profile:
            raise ValueError(f"Customer profile with ID {profile.id} not found")

        self._apply(db_profile, profile)
        self.db.commit()
        self.db.refresh(db_profile)
        return self._to_domain(db_profile)

    def delete(self, profile_id: int) -> bool:
        db_profile = self.db.get(DbProfile, profile_id)
        if not db_profile:
            return False

        self.db.delete(db_profile)
        self.db.commit()
        return True

    @staticmethod
    def _apply(db_profile: DbProfile, profile: DomainProfile) -> None:
        for name in _FIELDS:
            setattr(db_profile, name, getattr(profile, name))
        for name in _JSON_FIELDS:
            setattr(db_profile, name, copy.deepcopy(getattr(profile, name)))
            if db_profile.id is not None:
                flag_modified(db_profile, name)

    def _to_domain(self, db_profile: DbProfile) -> DomainProfile:
        """Convert database model to domain entity."""
        return DomainProfile(
            id=db_profile.id,
            customer_id=db_profile.customer_id,
            first_name=db_profile.first_name,
            last_name=db_profile.last_name,
            phone_number=db_profile.phone_number,
            date_of_birth=db_profile.date_of_birth,
            gender=db_profile.gender,
            profile_picture=db_profile.profile_picture,
            address=copy.deepcopy(db_profile.address),
            preferences=copy.deepcopy(db_profile.preferences) or default_preferences(),
            booking_history=copy.deepcopy(db_profile.booking_history or []),
            loyalty_points=db_profile.loyalty_points or 0,
            membership_tier=db_profile.membership_tier,
            emergency_contact=copy.deepcopy(db_profile.emergency_contact),
            is_active=db_profile.is_active,
            created_at=db_profile.created_at,
            updated_at=db_profile.updated_at,
        )
