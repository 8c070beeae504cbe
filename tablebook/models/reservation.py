"""Reservation model"""

import uuid
from sqlalchemy import Column, Integer, ForeignKey, Text, Enum, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum

from tablebook.database import Base
from tablebook.models.types import UTCDateTime, utcnow


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SEATED = "SEATED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    DENIED = "DENIED"
    NO_SHOW = "NO_SHOW"


# Statuses that no longer hold a table
RELEASED_STATUSES = frozenset({ReservationStatus.CANCELLED, ReservationStatus.DENIED})
LIVE_STATUSES = frozenset(s for s in ReservationStatus if s not in RELEASED_STATUSES)

_LIVE_PREDICATE = "status NOT IN ('CANCELLED', 'DENIED')"


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"
    __table_args__ = (
        # At most one live reservation per table and instant
        Index(
            "uq_reservations_live_table_slot",
            "table_id",
            "reservation_datetime",
            unique=True,
            postgresql_where=text(_LIVE_PREDICATE),
            sqlite_where=text(_LIVE_PREDICATE),
        ),
        Index("ix_reservations_datetime", "reservation_datetime"),
        Index("ix_reservations_status", "status"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    table_id = Column(UUID(as_uuid=True), ForeignKey("restaurant_tables.id"))  # null until assigned

    # Reservation details
    reservation_datetime = Column(UTCDateTime, nullable=False)
    party_size = Column(Integer, nullable=False)
    special_requests = Column(Text)

    # Status
    status = Column(Enum(ReservationStatus), nullable=False, default=ReservationStatus.PENDING)
    rejection_reason = Column(Text)
    approved_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id"))

    # Metadata
    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    customer = relationship("User", foreign_keys=[customer_id], lazy="selectin")
    table = relationship("RestaurantTable", lazy="selectin")
    approved_by = relationship("User", foreign_keys=[approved_by_id])

    @property
    def is_live(self) -> bool:
        return self.status in LIVE_STATUSES

    # Denormalised display fields
    @property
    def customer_name(self) -> str:
        return self.customer.full_name if self.customer else ""

    @property
    def customer_email(self):
        return self.customer.email if self.customer else None

    @property
    def customer_phone(self):
        return self.customer.phone if self.customer else None

    @property
    def table_number(self):
        return self.table.table_number if self.table else None

    @property
    def table_location(self):
        return self.table.location_description if self.table else None

    def __repr__(self):
        return f"<Reservation {self.id} {self.status} at {self.reservation_datetime}>"
