from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .session import Base


# Explicitly implement Flask-Login interface without inheriting UserMixin
class User(Base):
    """Account model for customers and salon owners"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # 'customer', 'owner'
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    # Owner approval status; NULL for customers
    status: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    reset_password_token: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True, index=True
    )
    reset_password_expires: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    active_flag: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    salon: Mapped[Optional["Salon"]] = relationship(
        back_populates="owner", cascade="all, delete-orphan", uselist=False
    )
    customer_profile: Mapped[Optional["CustomerProfile"]] = relationship(
        back_populates="customer", cascade="all, delete-orphan", uselist=False
    )

    @property
    def is_active(self) -> bool:
        # Flask-Login expects this property
        return bool(self.active_flag)

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    def get_id(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"<User id={self.id} role={self.role}>"


class Salon(Base):
    """Salon profile; one per owner"""

    __tablename__ = "salons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    salon_name: Mapped[str] = mapped_column(String(150), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    salon_images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    services: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)
    operating_hours: Mapped[List[Any]] = mapped_column(
        JSON, nullable=False, default=list
    )
    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    rating_average: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True
    )  # 'pending', 'approved', 'rejected'
    listing_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="notListed", index=True
    )  # 'listed', 'notListed'
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner: Mapped[User] = relationship(back_populates="salon")
    barbers: Mapped[List["Barber"]] = relationship(
        back_populates="salon", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Salon id={self.id} name={self.salon_name!r}>"


class Barber(Base):
    """Barber working at a salon"""

    __tablename__ = "barbers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    salon_id: Mapped[int] = mapped_column(
        ForeignKey("salons.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    specialties: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating_average: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    availability: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    salon: Mapped[Salon] = relationship(back_populates="barbers")

    def __repr__(self) -> str:
        return f"<Barber id={self.id} salon_id={self.salon_id} active={self.is_active}>"


class CustomerProfile(Base):
    """Customer profile with loyalty balance; one per customer account"""

    __tablename__ = "customer_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    address: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    preferences: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    booking_history: Mapped[List[Any]] = mapped_column(
        JSON, nullable=False, default=list
    )
    loyalty_points: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, index=True
    )
    membership_tier: Mapped[str] = mapped_column(
        String(20), nullable=False, default="bronze", index=True
    )
    emergency_contact: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    customer: Mapped[User] = relationship(back_populates="customer_profile")

    def __repr__(self) -> str:
        return (
            f"<CustomerProfile id={self.id} points={self.loyalty_points} "
            f"tier={self.membership_tier}>"
        )
