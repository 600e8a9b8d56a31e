"""
Repository package for database operations.
"""
from launchpad_bookings.repositories.base import BaseRepository
from launchpad_bookings.repositories.booking_repository import BookingRepository

__all__ = [
    'BaseRepository',
    'BookingRepository',
]
