"""Restaurant table schemas"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from tablebook.models.table import TableStatus, TableType


class TableResponse(BaseModel):
    """Table as offered to callers"""
    id: UUID
    table_number: str
    capacity: int
    table_type: TableType
    status: TableStatus
    location_description: Optional[str]

    class Config:
        from_attributes = True
