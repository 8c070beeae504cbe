"""Reservation and table-assignment services"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tablebook.database import get_db
from tablebook.services.availability import AvailabilityEngine, ServiceWindow, TimeSlot
from tablebook.services.conflicts import ConflictChecker
from tablebook.services.party_resolver import GuestDetails, PartyResolver, split_full_name
from tablebook.services.reservations import ReservationService
from tablebook.services.table_catalog import TableCatalog


def get_reservation_service(db: AsyncSession = Depends(get_db)) -> ReservationService:
    """FastAPI dependency building the service on the request's session"""
    return ReservationService(db)


__all__ = [
    "AvailabilityEngine",
    "ServiceWindow",
    "TimeSlot",
    "ConflictChecker",
    "GuestDetails",
    "PartyResolver",
    "split_full_name",
    "ReservationService",
    "TableCatalog",
    "get_reservation_service",
]
