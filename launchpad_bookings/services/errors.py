"""
Exceptions raised by the availability and booking services.
"""


class AvailabilityError(Exception):
    """Base exception for availability checks."""
    pass


class LaunchPadValidationError(AvailabilityError):
    """The launch pad could not be validated."""
    pass


class LaunchQueryError(AvailabilityError):
    """The launches for the requested date could not be fetched."""
    pass


class BookingError(Exception):
    """Base exception for booking operations."""
    pass


class AvailabilityCheckError(BookingError):
    """Availability could not be determined."""
    pass


class DateUnavailableError(BookingError):
    """A launch is scheduled on the requested pad and date."""
    pass


class BookingNotFoundError(BookingError):
    """No booking exists with the given ID."""

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"booking not found: {booking_id}")
