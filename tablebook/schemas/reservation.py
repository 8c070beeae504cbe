"""Reservation schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, AwareDatetime, EmailStr, Field

from tablebook.models.reservation import ReservationStatus
from tablebook.schemas.table import TableResponse


class ReservationCreate(BaseModel):
    """
    Create reservation request.

    Either ``customer_id`` (registered account) or the ``guest_*`` fields
    identify the party.
    """
    customer_id: Optional[UUID] = None
    guest_name: Optional[str] = Field(None, max_length=255)
    guest_email: Optional[EmailStr] = None
    guest_phone: Optional[str] = Field(None, max_length=255)
    table_id: Optional[UUID] = None
    auto_assign_table: bool = False
    party_size: int
    reservation_datetime: AwareDatetime
    special_requests: Optional[str] = None


class ReservationApprove(BaseModel):
    """Manager approval"""
    approver_id: UUID


class ReservationDeny(BaseModel):
    """Staff denial"""
    decider_id: UUID
    reason: Optional[str] = None


class TableAssignment(BaseModel):
    """Assign or re-assign a table"""
    table_id: UUID


class ReservationResponse(BaseModel):
    """Reservation view with denormalised customer and table fields"""
    id: UUID
    customer_id: UUID
    customer_name: str
    customer_email: Optional[str]
    customer_phone: Optional[str]
    table_id: Optional[UUID]
    table_number: Optional[str]
    table_location: Optional[str]
    party_size: int
    reservation_datetime: datetime
    status: ReservationStatus
    special_requests: Optional[str]
    rejection_reason: Optional[str]
    approved_by_id: Optional[UUID]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReservationListResponse(BaseModel):
    """Paginated reservation list"""
    items: List[ReservationResponse]
    total: int
    page: int
    page_size: int


class TimeSlotResponse(BaseModel):
    """One slot of the service window"""
    time: str
    starts_at: datetime
    is_available: bool
    available_tables: List[TableResponse] = []

    class Config:
        from_attributes = True
