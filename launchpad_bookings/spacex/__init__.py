"""
SpaceX launch-schedule API access: client, cache and errors.
"""
from launchpad_bookings.spacex.base import LaunchDataService
from launchpad_bookings.spacex.cache import CachedLaunchDataService, CacheKeys
from launchpad_bookings.spacex.client import SpaceXClient, SpaceXConfig
from launchpad_bookings.spacex.errors import (
    LaunchDataError,
    LaunchPadNotFoundError,
    TransportError,
    UpstreamError,
    caused_by,
)

__all__ = [
    'LaunchDataService',
    'CachedLaunchDataService',
    'CacheKeys',
    'SpaceXClient',
    'SpaceXConfig',
    'LaunchDataError',
    'LaunchPadNotFoundError',
    'TransportError',
    'UpstreamError',
    'caused_by',
]
