"""
Launch pad availability checks.
"""
from launchpad_bookings.logging_config import get_logger
from launchpad_bookings.services.errors import LaunchPadValidationError, LaunchQueryError
from launchpad_bookings.spacex.base import DateLike, LaunchDataService
from launchpad_bookings.spacex.errors import LaunchDataError

logger = get_logger(__name__, component="availability")


class AvailabilityService:
    """Decides whether a launch pad is free of launches on a given day."""

    def __init__(self, launch_data: LaunchDataService):
        self.launch_data = launch_data

    async def is_date_available(self, launch_pad_id: str, launch_date: DateLike) -> bool:
        """
        Check that the pad exists and has no launches on the day of launch_date.

        Returns:
            True if no launch is scheduled, False otherwise

        Raises:
            LaunchPadValidationError: If the pad does not exist or cannot be fetched
            LaunchQueryError: If the launches cannot be fetched
        """
        try:
            await self.launch_data.get_launch_pad_for_id(launch_pad_id)
        except LaunchDataError as e:
            raise LaunchPadValidationError(f"unable to get launch pad for ID: {e}") from e

        try:
            launches = await self.launch_data.get_launches_for_date(launch_pad_id, launch_date)
        except LaunchDataError as e:
            raise LaunchQueryError(f"unable to get launches: {e}") from e

        if launches:
            logger.info(
                "Date unavailable",
                launch_pad_id=launch_pad_id,
                date=str(launch_date),
                launches=[launch.name for launch in launches]
            )
            return False

        return True
