"""Pydantic schemas for request/response validation"""

from tablebook.schemas.table import TableResponse
from tablebook.schemas.reservation import (
    ReservationCreate,
    ReservationApprove,
    ReservationDeny,
    TableAssignment,
    ReservationResponse,
    ReservationListResponse,
    TimeSlotResponse,
)

__all__ = [
    "TableResponse",
    "ReservationCreate",
    "ReservationApprove",
    "ReservationDeny",
    "TableAssignment",
    "ReservationResponse",
    "ReservationListResponse",
    "TimeSlotResponse",
]
