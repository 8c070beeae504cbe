"""User (party) model"""

import uuid
from sqlalchemy import Column, String, Enum
from sqlalchemy.dialects.postgresql import UUID
import enum

from tablebook.database import Base
from tablebook.models.types import UTCDateTime, utcnow


class UserRole(str, enum.Enum):
    """Account roles"""
    CUSTOMER = "CUSTOMER"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class UserStatus(str, enum.Enum):
    """Account status"""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"


class UserOrigin(str, enum.Enum):
    """How the account came to exist"""
    REGISTERED = "REGISTERED"
    GUEST = "GUEST"  # provisioned from free-text reservation input


class User(Base):
    """Accounts that reservations are booked under, and staff who decide them"""
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Authentication
    email = Column(String(255), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)  # guest sentinel for GUEST accounts

    # Profile
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    phone = Column(String(255))

    # Role / status
    role = Column(Enum(UserRole), nullable=False, default=UserRole.CUSTOMER)
    status = Column(Enum(UserStatus), nullable=False, default=UserStatus.ACTIVE)
    origin = Column(Enum(UserOrigin), nullable=False, default=UserOrigin.REGISTERED)

    # Timestamps
    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_guest(self) -> bool:
        return self.origin == UserOrigin.GUEST
