"""Read-only view over the restaurant's physical tables"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from tablebook.errors import NotFoundError
from tablebook.models.table import RestaurantTable, TableStatus


class TableCatalog:
    """Table lookups. Booking never changes a table's floor status."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, table_id: UUID) -> RestaurantTable:
        table = await self.db.get(RestaurantTable, table_id)
        if table is None:
            raise NotFoundError(f"Table not found with ID: {table_id}")
        return table

    async def list_all(self) -> List[RestaurantTable]:
        result = await self.db.execute(
            select(RestaurantTable).order_by(RestaurantTable.table_number)
        )
        return list(result.scalars().all())

    async def bookable_for(self, party_size: int) -> List[RestaurantTable]:
        """AVAILABLE tables seating the party, tightest fit first"""
        result = await self.db.execute(
            select(RestaurantTable)
            .where(
                RestaurantTable.capacity >= party_size,
                RestaurantTable.status == TableStatus.AVAILABLE,
            )
            .order_by(RestaurantTable.capacity, RestaurantTable.table_number)
        )
        return list(result.scalars().all())

    async def max_capacity(self) -> Optional[int]:
        result = await self.db.execute(select(func.max(RestaurantTable.capacity)))
        return result.scalar()
