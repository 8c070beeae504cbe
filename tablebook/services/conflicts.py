"""Double-booking detection"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tablebook.models.reservation import Reservation, LIVE_STATUSES


class ConflictChecker:
    """Answers whether a table is already committed at an exact instant"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_table_reserved(
        self,
        table_id: UUID,
        at: datetime,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> bool:
        """
        True when a live (not CANCELLED, not DENIED) reservation holds
        ``table_id`` at exactly ``at``. PENDING holds count.
        """
        result = await self.db.execute(
            select(Reservation.id, Reservation.status).where(
                Reservation.table_id == table_id,
                Reservation.reservation_datetime == at,
            )
        )
        for reservation_id, status in result.all():
            if reservation_id == exclude_reservation_id:
                continue
            if status in LIVE_STATUSES:
                return True
        return False
