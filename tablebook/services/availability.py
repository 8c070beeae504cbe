"""Time-slot availability across the service window"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import AsyncIterator, Iterator, List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tablebook.config import Settings, settings as default_settings
from tablebook.errors import ValidationError
from tablebook.models.table import RestaurantTable
from tablebook.services.conflicts import ConflictChecker
from tablebook.services.table_catalog import TableCatalog

logger = structlog.get_logger()


@dataclass(frozen=True)
class ServiceWindow:
    """Bookable window in restaurant-local time, quantised into slots"""
    start: time
    end: time
    slot_minutes: int
    timezone: str

    def __post_init__(self):
        if self.slot_minutes <= 0:
            raise ValueError("slot_minutes must be positive")
        if self.end < self.start:
            raise ValueError("service window ends before it starts")

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "ServiceWindow":
        return cls(
            start=settings.service_window_start,
            end=settings.service_window_end,
            slot_minutes=settings.slot_minutes,
            timezone=settings.restaurant_timezone,
        )

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def slot_times(self) -> Iterator[time]:
        """Slot start times from ``start`` to ``end`` inclusive"""
        step = timedelta(minutes=self.slot_minutes)
        current = datetime.combine(date.min, self.start)
        last = datetime.combine(date.min, self.end)
        while current <= last:
            yield current.time()
            current += step

    def instant(self, on_date: date, at_time: time) -> datetime:
        return datetime.combine(on_date, at_time, tzinfo=self.tz)

    def day_bounds(self, on_date: date) -> Tuple[datetime, datetime]:
        """[start, end) of a local calendar day as aware datetimes"""
        start = datetime.combine(on_date, time.min, tzinfo=self.tz)
        end = datetime.combine(on_date + timedelta(days=1), time.min, tzinfo=self.tz)
        return start, end


@dataclass
class TimeSlot:
    time: str
    starts_at: datetime
    available_tables: List[RestaurantTable] = field(default_factory=list)

    @property
    def is_available(self) -> bool:
        return bool(self.available_tables)


class AvailabilityEngine:
    """Finds free tables per slot, reusing the conflict checker"""

    def __init__(
        self,
        db: AsyncSession,
        catalog: Optional[TableCatalog] = None,
        conflicts: Optional[ConflictChecker] = None,
        window: Optional[ServiceWindow] = None,
    ):
        self.catalog = catalog or TableCatalog(db)
        self.conflicts = conflicts or ConflictChecker(db)
        self.window = window or ServiceWindow.from_settings()

    async def iter_time_slots(self, on_date: date, party_size: int) -> AsyncIterator[TimeSlot]:
        """
        Yield every slot of the window for ``on_date``, available or not.

        Each call starts a fresh pass, so the sequence can be re-read.
        """
        _check_party_size(party_size)
        candidates = await self.catalog.bookable_for(party_size)
        for slot_time in self.window.slot_times():
            starts_at = self.window.instant(on_date, slot_time)
            yield TimeSlot(
                time=slot_time.strftime("%H:%M"),
                starts_at=starts_at,
                available_tables=await self._unreserved(candidates, starts_at),
            )

    async def get_time_slots(self, on_date: date, party_size: int) -> List[TimeSlot]:
        logger.info("Getting available time slots", date=on_date.isoformat(), party_size=party_size)
        return [slot async for slot in self.iter_time_slots(on_date, party_size)]

    async def get_available_tables(
        self, on_date: date, at_time: time, party_size: int
    ) -> List[RestaurantTable]:
        logger.info(
            "Getting available tables",
            date=on_date.isoformat(),
            time=at_time.strftime("%H:%M"),
            party_size=party_size,
        )
        return await self.available_at(self.window.instant(on_date, at_time), party_size)

    async def available_at(self, at: datetime, party_size: int) -> List[RestaurantTable]:
        """Free tables for an arbitrary aware instant"""
        _check_party_size(party_size)
        candidates = await self.catalog.bookable_for(party_size)
        return await self._unreserved(candidates, at)

    async def _unreserved(
        self, candidates: List[RestaurantTable], at: datetime
    ) -> List[RestaurantTable]:
        free = []
        for table in candidates:
            if not await self.conflicts.is_table_reserved(table.id, at):
                free.append(table)
        return free


def _check_party_size(party_size: int) -> None:
    if party_size < 1:
        raise ValidationError("Party size must be at least 1")
