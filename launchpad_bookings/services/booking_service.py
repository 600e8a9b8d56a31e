"""
Booking lifecycle: availability-checked creation, listing and deletion.
"""
import uuid
from typing import Callable, List, Optional

from launchpad_bookings.clock import Clock, SystemClock
from launchpad_bookings.logging_config import get_logger
from launchpad_bookings.models.database import Booking
from launchpad_bookings.models.schemas import BookingCreate, BookingFilters
from launchpad_bookings.repositories.booking_repository import BookingRepository
from launchpad_bookings.services.availability import AvailabilityService
from launchpad_bookings.services.errors import (
    AvailabilityCheckError,
    AvailabilityError,
    BookingNotFoundError,
    DateUnavailableError,
)

logger = get_logger(__name__, component="booking_service")


class BookingService:
    """Creates bookings only for launch pad dates that are free of launches."""

    def __init__(
        self,
        repository: BookingRepository,
        availability: AvailabilityService,
        clock: Optional[Clock] = None,
        id_generator: Callable[[], uuid.UUID] = uuid.uuid4
    ):
        self.repository = repository
        self.availability = availability
        self.clock = clock or SystemClock()
        self.id_generator = id_generator

    async def create_booking(self, booking_in: BookingCreate) -> Booking:
        """
        Persist a booking after checking the launch pad is free on the launch date.

        Raises:
            AvailabilityCheckError: If availability could not be determined
            DateUnavailableError: If a launch is scheduled that day
        """
        try:
            is_available = await self.availability.is_date_available(
                booking_in.launch_pad_id,
                booking_in.launch_date
            )
        except AvailabilityError as e:
            raise AvailabilityCheckError(f"cannot determine availability: {e}") from e

        if not is_available:
            raise DateUnavailableError(
                f"launch pad {booking_in.launch_pad_id} is unavailable on {booking_in.launch_date.isoformat()}"
            )

        now = self.clock.now()
        data = booking_in.model_dump()
        data.update(
            id=str(self.id_generator()),
            created_at=now,
            updated_at=now
        )
        booking = self.repository.create(data)

        logger.info(
            "Booking created",
            booking_id=booking.id,
            launch_pad_id=booking.launch_pad_id,
            launch_date=booking.launch_date.isoformat()
        )
        return booking

    def list_bookings(self, filters: BookingFilters, offset: int = 0, limit: int = 10) -> List[Booking]:
        """List bookings matching the filters."""
        return self.repository.list_bookings(filters, offset=offset, limit=limit)

    def get_booking(self, booking_id: str) -> Booking:
        """Get a booking by ID or raise BookingNotFoundError."""
        booking = self.repository.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def delete_booking(self, booking_id: str) -> None:
        """Delete a booking by ID or raise BookingNotFoundError."""
        if not self.repository.delete(booking_id):
            raise BookingNotFoundError(booking_id)
        logger.info("Booking deleted", booking_id=booking_id)
