"""
Exceptions raised while talking to the SpaceX launch-schedule API.
"""
from typing import Optional, Type


class LaunchDataError(Exception):
    """Base exception for launch data lookups."""
    pass


class LaunchPadNotFoundError(LaunchDataError):
    """The requested launch pad ID is not known upstream."""

    def __init__(self, launch_pad_id: str):
        self.launch_pad_id = launch_pad_id
        super().__init__(f"launch pad not found: {launch_pad_id}")


class UpstreamError(LaunchDataError):
    """Non-success status or malformed payload from the upstream API."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class TransportError(LaunchDataError):
    """The upstream API could not be reached."""
    pass


def caused_by(exc: BaseException, exc_type: Type[BaseException]) -> bool:
    """Return True if exc or any exception in its __cause__ chain is an exc_type."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, exc_type):
            return True
        seen.add(id(current))
        current = current.__cause__
    return False
