"""
In-memory caching layer in front of a LaunchDataService.

Launch pads are cached for the lifetime of the process. Launch lists are
cached only for dates strictly before the current time, since schedules for
today and later can still change.
"""

import asyncio
from typing import Dict, List, Optional

from launchpad_bookings.clock import Clock, SystemClock
from launchpad_bookings.logging_config import get_logger
from launchpad_bookings.models.schemas import Launch, LaunchPad
from launchpad_bookings.spacex.base import DateLike, LaunchDataService, to_utc_datetime, to_utc_day
from launchpad_bookings.spacex.errors import LaunchDataError

logger = get_logger(__name__, component="launch_data_cache")


class CacheKeys:
    """Cache key definitions."""

    @staticmethod
    def launch_pad(launch_pad_id: str) -> str:
        """Key for a launch pad lookup."""
        return launch_pad_id

    @staticmethod
    def launches(launch_pad_id: str, launch_date: DateLike) -> str:
        """Key for the launches on a pad during one UTC day."""
        return f"{launch_pad_id}_{to_utc_day(launch_date).isoformat()}"


class CachedLaunchDataService(LaunchDataService):
    """
    Read-through cache wrapping another LaunchDataService.

    Entries never expire and are never evicted. Both maps are guarded by a
    lock held only while reading or writing them, so concurrent misses on the
    same key may each call upstream; the last write wins.
    """

    def __init__(self, service: LaunchDataService, clock: Optional[Clock] = None):
        """
        Initialize the cache.

        Args:
            service: Upstream service to read through to
            clock: Source of "now" for the past/future split
        """
        self.service = service
        self.clock = clock or SystemClock()
        self._launch_pads: Dict[str, LaunchPad] = {}
        self._launches: Dict[str, List[Launch]] = {}
        self._lock = asyncio.Lock()

    @property
    def cached_launch_pad_count(self) -> int:
        """Number of cached launch pads."""
        return len(self._launch_pads)

    @property
    def cached_launch_list_count(self) -> int:
        """Number of cached launch lists."""
        return len(self._launches)

    async def get_launch_pad_for_id(self, launch_pad_id: str) -> LaunchPad:
        """Get a launch pad, calling upstream only on the first lookup of an ID."""
        key = CacheKeys.launch_pad(launch_pad_id)
        async with self._lock:
            cached = self._launch_pads.get(key)
        if cached is not None:
            logger.debug("Launch pad cache hit", launch_pad_id=launch_pad_id)
            return cached

        try:
            launch_pad = await self.service.get_launch_pad_for_id(launch_pad_id)
        except LaunchDataError as e:
            raise LaunchDataError(f"unable to get launch pad: {e}") from e

        async with self._lock:
            self._launch_pads[key] = launch_pad
        logger.debug("Launch pad cached", launch_pad_id=launch_pad_id)
        return launch_pad

    async def get_launches_for_date(self, launch_pad_id: str, launch_date: DateLike) -> List[Launch]:
        """Get launches for a pad and day; past days are served from cache after the first call."""
        now = self.clock.now()
        if to_utc_datetime(launch_date) >= now:
            return await self.service.get_launches_for_date(launch_pad_id, launch_date)

        key = CacheKeys.launches(launch_pad_id, launch_date)
        async with self._lock:
            cached = self._launches.get(key)
        if cached is not None:
            logger.debug("Launch list cache hit", key=key)
            return list(cached)

        try:
            launches = await self.service.get_launches_for_date(launch_pad_id, launch_date)
        except LaunchDataError as e:
            raise LaunchDataError(f"unable to get launches: {e}") from e

        async with self._lock:
            self._launches[key] = list(launches)
        logger.debug("Launch list cached", key=key, count=len(launches))
        return launches
