"""
Repository for booking persistence.
"""
from typing import List

from sqlalchemy.orm import Session

from launchpad_bookings.models.database import Booking
from launchpad_bookings.models.schemas import BookingFilters
from launchpad_bookings.repositories.base import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking rows."""

    def __init__(self, session: Session):
        """Initialize booking repository."""
        super().__init__(Booking, session)

    def list_bookings(self, filters: BookingFilters, offset: int = 0, limit: int = 10) -> List[Booking]:
        """List bookings matching the filters, oldest first."""
        return self.get_multi(
            skip=offset,
            limit=limit,
            filters=filters.model_dump(),
            order_by='created_at'
        )
