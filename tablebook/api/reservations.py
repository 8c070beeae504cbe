"""Reservation management API endpoints"""

from datetime import date, time
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from tablebook.models.reservation import ReservationStatus
from tablebook.schemas.reservation import (
    ReservationCreate,
    ReservationApprove,
    ReservationDeny,
    TableAssignment,
    ReservationResponse,
    ReservationListResponse,
    TimeSlotResponse,
)
from tablebook.schemas.table import TableResponse
from tablebook.services import ReservationService, get_reservation_service

router = APIRouter()


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: Optional[ReservationStatus] = None,
    date: Optional[date] = None,
    customer_id: Optional[UUID] = None,
    service: ReservationService = Depends(get_reservation_service),
):
    """List reservations with optional status, service date and customer filters"""
    reservations, total = await service.list_reservations(
        status=status,
        on_date=date,
        customer_id=customer_id,
        page=page,
        page_size=page_size,
    )
    return ReservationListResponse(
        items=reservations,
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Create a new reservation (status PENDING)"""
    return await service.create_reservation(reservation_data)


@router.get("/timeslots", response_model=List[TimeSlotResponse])
async def get_time_slots(
    date: date,
    party_size: int,
    service: ReservationService = Depends(get_reservation_service),
):
    """Every slot of the service window with the tables free in it"""
    slots = await service.availability.get_time_slots(date, party_size)
    return [TimeSlotResponse.model_validate(slot) for slot in slots]


@router.get("/availability", response_model=List[TableResponse])
async def get_available_tables(
    date: date,
    time: time,
    party_size: int,
    service: ReservationService = Depends(get_reservation_service),
):
    """Tables free for a party at one date and time"""
    return await service.availability.get_available_tables(date, time, party_size)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation details"""
    return await service.get_reservation(reservation_id)


@router.post("/{reservation_id}/approve", response_model=ReservationResponse)
async def approve_reservation(
    reservation_id: UUID,
    request: ReservationApprove,
    service: ReservationService = Depends(get_reservation_service),
):
    """Manager approves a PENDING reservation"""
    return await service.approve(reservation_id, request.approver_id)


@router.post("/{reservation_id}/deny", response_model=ReservationResponse)
async def deny_reservation(
    reservation_id: UUID,
    request: ReservationDeny,
    service: ReservationService = Depends(get_reservation_service),
):
    """Staff denies a PENDING reservation"""
    return await service.deny(reservation_id, request.reason, request.decider_id)


@router.put("/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    """Customer cancels a PENDING or CONFIRMED reservation"""
    return await service.cancel(reservation_id)


@router.put("/{reservation_id}/table", response_model=ReservationResponse)
async def assign_table(
    reservation_id: UUID,
    request: TableAssignment,
    service: ReservationService = Depends(get_reservation_service),
):
    """Assign or move the reservation's table"""
    return await service.assign_table(reservation_id, request.table_id)


@router.put("/{reservation_id}/seat", response_model=ReservationResponse)
async def seat_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    return await service.seat(reservation_id)


@router.put("/{reservation_id}/complete", response_model=ReservationResponse)
async def complete_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    return await service.complete(reservation_id)


@router.put("/{reservation_id}/no-show", response_model=ReservationResponse)
async def mark_no_show(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    return await service.mark_no_show(reservation_id)


@router.delete("/{reservation_id}", status_code=204)
async def delete_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    """Administrative delete"""
    await service.delete_reservation(reservation_id)
