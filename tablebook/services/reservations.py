"""Reservation lifecycle operations"""

from datetime import date, datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tablebook.config import settings
from tablebook.errors import ConflictError, NotFoundError, ReservationError, ValidationError
from tablebook.models.reservation import Reservation, ReservationStatus
from tablebook.models.table import RestaurantTable
from tablebook.models.types import utcnow
from tablebook.models.user import User
from tablebook.schemas.reservation import ReservationCreate
from tablebook.services.availability import AvailabilityEngine, ServiceWindow
from tablebook.services.conflicts import ConflictChecker
from tablebook.services.lifecycle import ensure_transition, sources_for
from tablebook.services.party_resolver import GuestDetails, PartyResolver
from tablebook.services.table_catalog import TableCatalog

logger = structlog.get_logger()

ASSIGNABLE_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


class ReservationService:
    """
    Owns the reservation state machine.

    Every status change is a conditional UPDATE guarded by the allowed source
    states, so when two callers race only the first write lands and the
    other observes a Conflict.
    """

    def __init__(self, db: AsyncSession, window: Optional[ServiceWindow] = None):
        self.db = db
        self.parties = PartyResolver(db)
        self.tables = TableCatalog(db)
        self.conflicts = ConflictChecker(db)
        self.availability = AvailabilityEngine(db, self.tables, self.conflicts, window)

    # Creation

    async def create_reservation(self, data: ReservationCreate) -> Reservation:
        """Create a PENDING reservation, optionally holding a table"""
        logger.info(
            "Creating reservation",
            customer_id=str(data.customer_id) if data.customer_id else None,
            table_id=str(data.table_id) if data.table_id else None,
            party_size=data.party_size,
        )
        try:
            reservation = await self._build_reservation(data)
        except ReservationError as e:
            await self.db.rollback()
            logger.warning("Reservation rejected", reason=e.message)
            raise

        self.db.add(reservation)
        await self._commit_slot()
        logger.info("Created reservation", reservation_id=str(reservation.id))
        return await self.get_reservation(reservation.id)

    async def _build_reservation(self, data: ReservationCreate) -> Reservation:
        at = data.reservation_datetime
        if data.party_size < 1:
            raise ValidationError("Party size must be at least 1")
        if at.tzinfo is None:
            raise ValidationError("Reservation time must include a UTC offset")

        guest = None
        if data.customer_id is None:
            guest = GuestDetails(name=data.guest_name, email=data.guest_email, phone=data.guest_phone)
        customer = await self.parties.resolve(customer_id=data.customer_id, guest=guest)

        table = None
        if data.table_id is not None:
            table = await self._bookable_table(data.table_id, data.party_size, at)

        if settings.require_future_reservations and at <= utcnow():
            raise ValidationError("Reservation date must be in the future")

        if table is None:
            max_capacity = await self.tables.max_capacity()
            if max_capacity is not None and data.party_size > max_capacity:
                raise ValidationError(
                    f"Number of guests ({data.party_size}) exceeds the largest table capacity ({max_capacity})"
                )
            if data.auto_assign_table:
                free = await self.availability.available_at(at, data.party_size)
                if not free:
                    raise ConflictError("No table is available for this time")
                table = free[0]

        return Reservation(
            customer_id=customer.id,
            table_id=table.id if table else None,
            reservation_datetime=at,
            party_size=data.party_size,
            special_requests=data.special_requests,
            status=ReservationStatus.PENDING,
        )

    async def _bookable_table(
        self,
        table_id: UUID,
        party_size: int,
        at: datetime,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> RestaurantTable:
        table = await self.tables.get(table_id)
        if party_size > table.capacity:
            raise ValidationError(
                f"Number of guests ({party_size}) exceeds table capacity ({table.capacity})"
            )
        if await self.conflicts.is_table_reserved(table.id, at, exclude_reservation_id):
            raise ConflictError("Table is already reserved for this time")
        return table

    async def _commit_slot(self) -> None:
        """Commit, mapping a lost race on the live-slot index to a Conflict"""
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Reservation slot taken concurrently")
            raise ConflictError("Slot no longer available")

    # Queries

    async def get_reservation(self, reservation_id: UUID) -> Reservation:
        result = await self.db.execute(
            select(Reservation)
            .where(Reservation.id == reservation_id)
            .execution_options(populate_existing=True)
        )
        reservation = result.scalar_one_or_none()
        if reservation is None:
            raise NotFoundError(f"Reservation not found with ID: {reservation_id}")
        return reservation

    async def list_reservations(
        self,
        status: Optional[ReservationStatus] = None,
        on_date: Optional[date] = None,
        customer_id: Optional[UUID] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> Tuple[List[Reservation], int]:
        """Filtered, paginated listing. ``on_date`` is a local service date."""
        filters = []
        if status is not None:
            filters.append(Reservation.status == status)
        if on_date is not None:
            day_start, day_end = self.availability.window.day_bounds(on_date)
            filters.append(Reservation.reservation_datetime >= day_start)
            filters.append(Reservation.reservation_datetime < day_end)
        if customer_id is not None:
            filters.append(Reservation.customer_id == customer_id)

        total_result = await self.db.execute(
            select(func.count(Reservation.id)).where(*filters)
        )
        total = total_result.scalar()

        result = await self.db.execute(
            select(Reservation)
            .where(*filters)
            .order_by(Reservation.reservation_datetime.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all()), total

    # Manager decisions

    async def approve(self, reservation_id: UUID, approver_id: UUID) -> Reservation:
        logger.info("Approving reservation", reservation_id=str(reservation_id), approver_id=str(approver_id))
        reservation = await self.get_reservation(reservation_id)
        self._ensure(reservation, ReservationStatus.CONFIRMED)
        approver = await self._staff(approver_id, "Approver")
        return await self._transition(
            reservation_id, ReservationStatus.CONFIRMED, approved_by_id=approver.id
        )

    async def deny(
        self, reservation_id: UUID, reason: Optional[str], decider_id: UUID
    ) -> Reservation:
        """Staff refusal before confirmation. Always ends in DENIED."""
        logger.info("Denying reservation", reservation_id=str(reservation_id), reason=reason)
        reservation = await self.get_reservation(reservation_id)
        self._ensure(reservation, ReservationStatus.DENIED)
        decider = await self._staff(decider_id, "Decider")
        return await self._transition(
            reservation_id,
            ReservationStatus.DENIED,
            rejection_reason=reason,
            approved_by_id=decider.id,
        )

    # Customer and floor actions

    async def cancel(self, reservation_id: UUID) -> Reservation:
        logger.info("Cancelling reservation", reservation_id=str(reservation_id))
        return await self._move(reservation_id, ReservationStatus.CANCELLED)

    async def seat(self, reservation_id: UUID) -> Reservation:
        return await self._move(reservation_id, ReservationStatus.SEATED)

    async def complete(self, reservation_id: UUID) -> Reservation:
        return await self._move(reservation_id, ReservationStatus.COMPLETED)

    async def mark_no_show(self, reservation_id: UUID) -> Reservation:
        return await self._move(reservation_id, ReservationStatus.NO_SHOW)

    async def assign_table(self, reservation_id: UUID, table_id: UUID) -> Reservation:
        """Staff assigns (or moves) the table for a PENDING or CONFIRMED booking"""
        logger.info("Assigning table", reservation_id=str(reservation_id), table_id=str(table_id))
        reservation = await self.get_reservation(reservation_id)
        if reservation.status not in ASSIGNABLE_STATUSES:
            raise ConflictError(
                f"Cannot assign a table to a {reservation.status.value} reservation"
            )
        table = await self._bookable_table(
            table_id,
            reservation.party_size,
            reservation.reservation_datetime,
            exclude_reservation_id=reservation.id,
        )
        try:
            result = await self.db.execute(
                update(Reservation)
                .where(
                    Reservation.id == reservation_id,
                    Reservation.status.in_(ASSIGNABLE_STATUSES),
                )
                .values(table_id=table.id, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Slot no longer available")
        if result.rowcount == 0:
            await self.db.rollback()
            raise ConflictError("Reservation changed while assigning a table")
        await self.db.commit()
        return await self.get_reservation(reservation_id)

    # Administration

    async def delete_reservation(self, reservation_id: UUID) -> None:
        """Administrative hard delete, outside the normal lifecycle"""
        logger.info("Deleting reservation", reservation_id=str(reservation_id))
        result = await self.db.execute(
            delete(Reservation).where(Reservation.id == reservation_id)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError(f"Reservation not found with ID: {reservation_id}")
        await self.db.commit()

    # Helpers

    async def _move(self, reservation_id: UUID, target: ReservationStatus) -> Reservation:
        reservation = await self.get_reservation(reservation_id)
        self._ensure(reservation, target)
        return await self._transition(reservation_id, target)

    def _ensure(self, reservation: Reservation, target: ReservationStatus) -> None:
        try:
            ensure_transition(reservation.status, target)
        except ConflictError as e:
            logger.warning(
                "Reservation transition rejected",
                reservation_id=str(reservation.id),
                current=reservation.status.value,
                target=target.value,
                reason=e.message,
            )
            raise

    async def _staff(self, user_id: UUID, label: str) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(f"{label} not found with ID: {user_id}")
        return user

    async def _transition(
        self, reservation_id: UUID, target: ReservationStatus, **values
    ) -> Reservation:
        """
        Write ``target`` only if the row is still in a valid source state.

        Zero affected rows means another writer moved the reservation first.
        """
        result = await self.db.execute(
            update(Reservation)
            .where(
                Reservation.id == reservation_id,
                Reservation.status.in_(list(sources_for(target))),
            )
            .values(status=target, updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            current = await self.get_reservation(reservation_id)
            self._ensure(current, target)
            raise ConflictError("Reservation was modified concurrently")
        await self.db.commit()
        logger.info(
            "Reservation status changed",
            reservation_id=str(reservation_id),
            status=target.value,
        )
        return await self.get_reservation(reservation_id)
