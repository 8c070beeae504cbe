"""Resolve the party a reservation is booked under"""

from dataclasses import dataclass
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tablebook.config import settings
from tablebook.errors import ConflictError, NotFoundError, ValidationError
from tablebook.models.user import User, UserOrigin, UserRole, UserStatus

logger = structlog.get_logger()


@dataclass(frozen=True)
class GuestDetails:
    """Free-text contact details from a walk-in or phone guest"""
    name: Optional[str]
    email: Optional[str]
    phone: Optional[str] = None


def split_full_name(full_name: str) -> Tuple[str, str]:
    """
    Split a free-text name into (first, last).

    The first whitespace-separated token is the first name and the remaining
    tokens, joined by single spaces, are the last name. A single token gives
    an empty last name.

    >>> split_full_name("Mary Anne Smith-Jones")
    ('Mary', 'Anne Smith-Jones')
    """
    tokens = full_name.split()
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


class PartyResolver:
    """Maps a reservation request to a concrete account"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(
        self,
        customer_id: Optional[UUID] = None,
        guest: Optional[GuestDetails] = None,
    ) -> User:
        if customer_id is not None:
            return await self._registered(customer_id)
        return await self._guest(guest)

    async def _registered(self, customer_id: UUID) -> User:
        user = await self.db.get(User, customer_id)
        if user is None or not user.is_active:
            raise NotFoundError(f"Customer not found with ID: {customer_id}")
        return user

    async def _guest(self, guest: Optional[GuestDetails]) -> User:
        email = (guest.email or "").strip() if guest else ""
        name = (guest.name or "").strip() if guest else ""
        if not email or not name:
            raise ValidationError("Guest email and name are required for guest reservations")

        existing = await self.find_by_email(email)
        if existing is not None:
            logger.info("Reusing account for guest", user_id=str(existing.id))
            return existing

        first_name, last_name = split_full_name(name)
        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=guest.phone,
            role=UserRole.CUSTOMER,
            status=UserStatus.ACTIVE,
            origin=UserOrigin.GUEST,
            hashed_password=settings.guest_credential_marker,
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            # Another request registered the same email after our lookup.
            # Resolution runs before any write of the unit of work, so a full
            # rollback discards only the failed insert.
            await self.db.rollback()
            existing = await self.find_by_email(email)
            if existing is None:
                raise ConflictError("An account for this email was just created, please retry")
            logger.info("Reusing account registered concurrently", user_id=str(existing.id))
            return existing

        logger.info("Created guest account", user_id=str(user.id))
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalars().first()
