"""
Business services: availability checks and bookings.
"""
from launchpad_bookings.services.availability import AvailabilityService
from launchpad_bookings.services.booking_service import BookingService

__all__ = [
    'AvailabilityService',
    'BookingService',
]
