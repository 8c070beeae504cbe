"""Database models"""

from tablebook.models.user import User, UserRole, UserStatus, UserOrigin
from tablebook.models.table import RestaurantTable, TableStatus, TableType
from tablebook.models.reservation import Reservation, ReservationStatus, LIVE_STATUSES

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "UserOrigin",
    "RestaurantTable",
    "TableStatus",
    "TableType",
    "Reservation",
    "ReservationStatus",
    "LIVE_STATUSES",
]
