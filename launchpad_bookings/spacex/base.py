"""
Abstract interface for launch data lookups.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import List, Union

from launchpad_bookings.models.schemas import Launch, LaunchPad

DateLike = Union[date, datetime]


class LaunchDataService(ABC):
    """Read-only access to launch pads and the launches scheduled on them."""

    @abstractmethod
    async def get_launch_pad_for_id(self, launch_pad_id: str) -> LaunchPad:
        """
        Get a launch pad by its upstream identifier.

        Raises:
            LaunchPadNotFoundError: If no pad has this identifier
            LaunchDataError: If the lookup fails
        """

    @abstractmethod
    async def get_launches_for_date(self, launch_pad_id: str, launch_date: DateLike) -> List[Launch]:
        """
        Get the launches on a pad during the UTC calendar day of launch_date.

        Raises:
            LaunchDataError: If the lookup fails
        """


def to_utc_datetime(value: DateLike) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime; dates become UTC midnight."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def to_utc_day(value: DateLike) -> date:
    """Calendar day of value in UTC."""
    return to_utc_datetime(value).date()
