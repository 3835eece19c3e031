from datetime import datetime
from typing import Optional

from sqlalchemy import func

from barberx.db.base import User as DbUser
from barberx.domain.entities import User as DomainUser
from barberx.domain.interfaces import IUserRepository


class UserRepository(IUserRepository):
    """Repository for account persistence.

    Maps between ``barberx.db.base.User`` rows and domain ``User`` entities.
    Emails are stored lower-cased and are unique across both roles.
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, user_id: int) -> Optional[DomainUser]:
        """Get account by ID, returning domain entity."""
        db_user = self.db.get(DbUser, user_id)
        return self._to_domain(db_user) if db_user else None

    def get_by_email(self, email: str) -> Optional[DomainUser]:
        """Get account by email, returning domain entity."""
        db_user = (
            self.db.query(DbUser)
            .filter(func.lower(DbUser.email) == email.strip().lower())
            .first()
        )
        return self._to_domain(db_user) if db_user else None

    def get_by_reset_token(self, token: str) -> Optional[DomainUser]:
        db_user = self.db.query(DbUser).filter_by(reset_password_token=token).first()
        return self._to_domain(db_user) if db_user else None

    def create(self, user: DomainUser) -> DomainUser:
        """Create a new account from domain entity."""
        db_user = DbUser(
            name=user.name.strip(),
            email=user.email.strip().lower(),
            password_hash=user.password_hash,
            role=user.role,
            phone_number=user.phone_number,
            profile_picture=user.profile_picture,
            status=user.status,
            active_flag=user.is_active,
        )

        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)

        return self._to_domain(db_user)

    def set_reset_token(self, user_id: int, token: str, expires: datetime) -> bool:
        db_user = self.db.get(DbUser, user_id)
        if not db_user:
            return False

        db_user.reset_password_token = token
        db_user.reset_password_expires = expires
        self.db.commit()
        return True

    def update_password(self, user_id: int, password_hash: str) -> bool:
        db_user = self.db.get(DbUser, user_id)
        if not db_user:
            return False

        db_user.password_hash = password_hash
        db_user.reset_password_token = None
        db_user.reset_password_expires = None
        self.db.commit()
        return True

    def _to_domain(self, db_user: DbUser) -> DomainUser:
        """Convert database model to domain entity."""
        return DomainUser(
            id=db_user.id,
            name=db_user.name,
            email=db_user.email,
            role=db_user.role,
            password_hash=db_user.password_hash,
            phone_number=db_user.phone_number,
            profile_picture=db_user.profile_picture,
            status=db_user.status,
            reset_password_token=db_user.reset_password_token,
            reset_password_expires=db_user.reset_password_expires,
            is_active=db_user.is_active,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at,
        )
