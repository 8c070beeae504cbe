"""Restaurant table model"""

import uuid
from sqlalchemy import Column, String, Integer, Enum, Text
from sqlalchemy.dialects.postgresql import UUID
import enum

from tablebook.database import Base
from tablebook.models.types import UTCDateTime, utcnow


class TableType(str, enum.Enum):
    REGULAR = "REGULAR"
    BOOTH = "BOOTH"
    BAR = "BAR"
    OUTDOOR = "OUTDOOR"


class TableStatus(str, enum.Enum):
    """Floor-management status, owned outside the booking flow"""
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"
    MAINTENANCE = "MAINTENANCE"


class RestaurantTable(Base):
    """Physical tables (reference data, read-only for bookings)"""
    __tablename__ = "restaurant_tables"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    table_number = Column(String(20), nullable=False)
    capacity = Column(Integer, nullable=False)
    table_type = Column(Enum(TableType), nullable=False, default=TableType.REGULAR)
    status = Column(Enum(TableStatus), nullable=False, default=TableStatus.AVAILABLE)
    location_description = Column(Text)

    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<RestaurantTable {self.table_number} seats={self.capacity} {self.status}>"
