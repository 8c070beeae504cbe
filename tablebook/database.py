"""Database engine, session factory and declarative base"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from tablebook.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
)

# Objects stay readable after commit; reloads use populate_existing
SessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding one session per request.
    The session is the unit of work for a single operation.
    """
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
