"""Read-only table catalog endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tablebook.database import get_db
from tablebook.schemas.table import TableResponse
from tablebook.services.table_catalog import TableCatalog

router = APIRouter()


@router.get("", response_model=List[TableResponse])
async def list_tables(db: AsyncSession = Depends(get_db)):
    """List all tables"""
    return await TableCatalog(db).list_all()


@router.get("/{table_id}", response_model=TableResponse)
async def get_table(table_id: UUID, db: AsyncSession = Depends(get_db)):
    """Get table details"""
    return await TableCatalog(db).get(table_id)
