"""
Async client for the SpaceX launch-schedule API.
"""

import asyncio
import os
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import TypeAdapter, ValidationError

from launchpad_bookings.logging_config import get_logger
from launchpad_bookings.models.schemas import (
    DateRange,
    Launch,
    LaunchPad,
    LaunchQuery,
    LaunchQueryOptions,
    LaunchQueryRequest,
    LaunchQueryResponse,
)
from launchpad_bookings.spacex.base import DateLike, LaunchDataService, to_utc_day
from launchpad_bookings.spacex.errors import (
    LaunchDataError,
    LaunchPadNotFoundError,
    TransportError,
    UpstreamError,
)

logger = get_logger(__name__, component="spacex_client")

_launch_pads_adapter = TypeAdapter(List[LaunchPad])


class SpaceXConfig:
    """SpaceX API client configuration."""

    DEFAULT_BASE_URL = "https://api.spacexdata.com/v4"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        query_limit: Optional[int] = None
    ):
        """Initialize configuration, falling back to environment variables."""
        self.base_url = (base_url or os.getenv("SPACEX_API_URL", self.DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = float(timeout if timeout is not None else os.getenv("SPACEX_API_TIMEOUT", "30"))
        self.query_limit = int(query_limit if query_limit is not None else os.getenv("SPACEX_QUERY_LIMIT", "5"))


class SpaceXClient(LaunchDataService):
    """
    Client for the launchpads and launches endpoints of the SpaceX API.
    No retries: a failed call surfaces immediately to the caller.
    """

    def __init__(
        self,
        config: Optional[SpaceXConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the client.

        Args:
            config: API configuration, read from the environment if None
            session: Externally owned aiohttp session; the client opens its own if None
        """
        self.config = config or SpaceXConfig()
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close_session()

    async def start_session(self):
        """Start the aiohttp session if none was injected."""
        if self.session is not None:
            return
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self.session = aiohttp.ClientSession(timeout=timeout)
        self._owns_session = True
        logger.info("SpaceX client session started", base_url=self.config.base_url)

    async def close_session(self):
        """Close the aiohttp session if this client opened it."""
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None
            logger.info("SpaceX client session closed")

    async def get_launch_pad_for_id(self, launch_pad_id: str) -> LaunchPad:
        """
        Fetch all launch pads and return the one with a matching ID.

        Raises:
            LaunchPadNotFoundError: If no pad matches
            UpstreamError: On a non-200 response or malformed body
            TransportError: If the API cannot be reached
        """
        url = f"{self.config.base_url}/launchpads"
        payload = await self._request_json("GET", url, "launchpads")

        try:
            launch_pads = _launch_pads_adapter.validate_python(payload)
        except ValidationError as e:
            raise UpstreamError(f"malformed launchpads response: {e}") from e

        for launch_pad in launch_pads:
            if launch_pad.id == launch_pad_id:
                return launch_pad

        logger.info("Launch pad not found upstream", launch_pad_id=launch_pad_id)
        raise LaunchPadNotFoundError(launch_pad_id)

    async def get_launches_for_date(self, launch_pad_id: str, launch_date: DateLike) -> List[Launch]:
        """
        Query the launches on a pad during one UTC calendar day.

        Raises:
            UpstreamError: On a non-200 response or malformed body
            TransportError: If the API cannot be reached
        """
        url = f"{self.config.base_url}/launches/query"
        body = self.build_launch_query(launch_pad_id, launch_date, self.config.query_limit)
        payload = await self._request_json("POST", url, "launches", json_body=body)

        try:
            launches = LaunchQueryResponse.model_validate(payload).docs
        except ValidationError as e:
            raise UpstreamError(f"malformed launches response: {e}") from e

        logger.debug(
            "Fetched launches",
            launch_pad_id=launch_pad_id,
            date=str(to_utc_day(launch_date)),
            count=len(launches)
        )
        return launches

    @staticmethod
    def build_launch_query(launch_pad_id: str, launch_date: DateLike, limit: int = 5) -> Dict[str, Any]:
        """Build the /launches/query body covering the whole UTC day of launch_date."""
        day = to_utc_day(launch_date).isoformat()
        request = LaunchQueryRequest(
            query=LaunchQuery(
                launchpad=launch_pad_id,
                date_utc=DateRange(
                    gte=f"{day}T00:00:00.000Z",
                    lt=f"{day}T23:59:59.999Z"
                )
            ),
            options=LaunchQueryOptions(limit=limit)
        )
        return request.model_dump(by_alias=True)

    async def _request_json(
        self,
        method: str,
        url: str,
        resource: str,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Send a request and decode the JSON body of a 200 response."""
        if self.session is None:
            raise LaunchDataError("Session not initialized. Use async context manager or call start_session()")

        try:
            async with self.session.request(method, url, json=json_body) as response:
                if response.status != 200:
                    logger.warning(
                        "Upstream returned error status",
                        url=url,
                        status=response.status
                    )
                    raise UpstreamError(
                        f"failed to fetch {resource}: status code {response.status}",
                        status=response.status
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise UpstreamError(f"malformed {resource} response: {e}", status=response.status) from e

        except aiohttp.ClientError as e:
            logger.error("Network error calling SpaceX API", url=url, error=str(e))
            raise TransportError(f"unable to make request: {e}") from e

        except asyncio.TimeoutError as e:
            logger.error("Timeout calling SpaceX API", url=url)
            raise TransportError(f"request to {url} timed out") from e
