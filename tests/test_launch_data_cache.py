"""
Tests for the in-memory launch data cache.
"""
import asyncio
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from launchpad_bookings.models.schemas import Launch, LaunchPad
from launchpad_bookings.spacex.cache import CachedLaunchDataService, CacheKeys
from launchpad_bookings.spacex.errors import (
    LaunchDataError,
    LaunchPadNotFoundError,
    UpstreamError,
    caused_by,
)


def make_launch(name: str) -> Launch:
    return Launch(
        name=name,
        date_utc=datetime(2025, 11, 21, 12, 0, tzinfo=timezone.utc),
        launchpad="1",
        success=True
    )


@pytest.fixture
def upstream():
    """Upstream launch data service double."""
    service = Mock()
    service.get_launch_pad_for_id = AsyncMock(return_value=LaunchPad(id="1", name="Launchpad 1"))
    service.get_launches_for_date = AsyncMock(return_value=[make_launch("Launch 1"), make_launch("Launch 2")])
    return service


@pytest.fixture
def cache(upstream, fixed_clock):
    """Cache in front of the upstream double, clock fixed at 2025-12-01T00:00Z."""
    return CachedLaunchDataService(upstream, fixed_clock)


class TestCacheKeys:
    """Test cache key generation."""

    def test_launch_pad_key(self):
        assert CacheKeys.launch_pad("5e9e4501f509094ba4566f84") == "5e9e4501f509094ba4566f84"

    def test_launches_key(self):
        assert CacheKeys.launches("1", date(2025, 11, 21)) == "1_2025-11-21"

    def test_launches_key_ignores_time_of_day(self):
        morning = datetime(2025, 11, 21, 1, 0, tzinfo=timezone.utc)
        evening = datetime(2025, 11, 21, 23, 0, tzinfo=timezone.utc)

        assert CacheKeys.launches("1", morning) == CacheKeys.launches("1", evening)


class TestLaunchPadCache:
    """Test launch pad caching."""

    @pytest.mark.asyncio
    async def test_second_lookup_served_from_cache(self, cache, upstream):
        first = await cache.get_launch_pad_for_id("1")
        second = await cache.get_launch_pad_for_id("1")

        assert first == second == LaunchPad(id="1", name="Launchpad 1")
        upstream.get_launch_pad_for_id.assert_awaited_once_with("1")
        assert cache.cached_launch_pad_count == 1

    @pytest.mark.asyncio
    async def test_distinct_ids_cached_separately(self, cache, upstream):
        upstream.get_launch_pad_for_id.side_effect = lambda pad_id: LaunchPad(id=pad_id)

        await cache.get_launch_pad_for_id("1")
        await cache.get_launch_pad_for_id("2")
        await cache.get_launch_pad_for_id("1")

        assert upstream.get_launch_pad_for_id.await_count == 2
        assert cache.cached_launch_pad_count == 2

    @pytest.mark.asyncio
    async def test_not_found_wrapped_and_not_cached(self, cache, upstream):
        upstream.get_launch_pad_for_id.side_effect = LaunchPadNotFoundError("invalid")

        with pytest.raises(LaunchDataError, match="unable to get launch pad: launch pad not found: invalid") as exc_info:
            await cache.get_launch_pad_for_id("invalid")

        assert caused_by(exc_info.value, LaunchPadNotFoundError)
        assert cache.cached_launch_pad_count == 0

    @pytest.mark.asyncio
    async def test_error_then_success(self, cache, upstream):
        upstream.get_launch_pad_for_id.side_effect = [
            UpstreamError("failed to fetch launchpads: status code 500", status=500),
            LaunchPad(id="1"),
        ]

        with pytest.raises(LaunchDataError):
            await cache.get_launch_pad_for_id("1")
        launch_pad = await cache.get_launch_pad_for_id("1")

        assert launch_pad.id == "1"
        assert upstream.get_launch_pad_for_id.await_count == 2


class TestLaunchListCache:
    """Test the past/future split of launch list caching."""

    @pytest.mark.asyncio
    async def test_past_date_cached(self, cache, upstream):
        past = date(2025, 11, 21)

        first = await cache.get_launches_for_date("1", past)
        second = await cache.get_launches_for_date("1", past)

        assert len(first) == 2
        assert second == first
        upstream.get_launches_for_date.assert_awaited_once_with("1", past)
        assert cache.cached_launch_list_count == 1

    @pytest.mark.asyncio
    async def test_future_date_not_cached(self, cache, upstream):
        future = date(2025, 12, 2)

        await cache.get_launches_for_date("1", future)
        await cache.get_launches_for_date("1", future)

        assert upstream.get_launches_for_date.await_count == 2
        assert cache.cached_launch_list_count == 0

    @pytest.mark.asyncio
    async def test_current_instant_not_cached(self, cache, upstream, fixed_now):
        await cache.get_launches_for_date("1", fixed_now)
        await cache.get_launches_for_date("1", fixed_now)

        assert upstream.get_launches_for_date.await_count == 2
        assert cache.cached_launch_list_count == 0

    @pytest.mark.asyncio
    async def test_empty_past_result_cached(self, cache, upstream):
        upstream.get_launches_for_date.return_value = []

        assert await cache.get_launches_for_date("1", date(2025, 1, 1)) == []
        assert await cache.get_launches_for_date("1", date(2025, 1, 1)) == []

        upstream.get_launches_for_date.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_past_error_wrapped_and_not_cached(self, cache, upstream):
        upstream.get_launches_for_date.side_effect = [
            UpstreamError("failed to fetch launches: status code 500", status=500),
            [],
        ]

        with pytest.raises(LaunchDataError, match="unable to get launches: failed to fetch launches"):
            await cache.get_launches_for_date("1", date(2025, 11, 21))

        assert cache.cached_launch_list_count == 0
        assert await cache.get_launches_for_date("1", date(2025, 11, 21)) == []
        assert upstream.get_launches_for_date.await_count == 2

    @pytest.mark.asyncio
    async def test_future_error_passed_through(self, cache, upstream):
        error = UpstreamError("failed to fetch launches: status code 500", status=500)
        upstream.get_launches_for_date.side_effect = error

        with pytest.raises(UpstreamError) as exc_info:
            await cache.get_launches_for_date("1", date(2026, 1, 1))

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_cached_list_not_shared_with_caller(self, cache):
        first = await cache.get_launches_for_date("1", date(2025, 11, 21))
        first.clear()

        second = await cache.get_launches_for_date("1", date(2025, 11, 21))

        assert len(second) == 2

    @pytest.mark.asyncio
    async def test_pads_and_dates_keyed_separately(self, cache, upstream):
        await cache.get_launches_for_date("1", date(2025, 11, 21))
        await cache.get_launches_for_date("2", date(2025, 11, 21))
        await cache.get_launches_for_date("1", date(2025, 11, 20))

        assert upstream.get_launches_for_date.await_count == 3
        assert cache.cached_launch_list_count == 3


class TestConcurrentAccess:
    """Concurrent lookups against a slow upstream."""

    CALLERS = 10

    @pytest.fixture
    def slow_upstream(self):
        """Upstream double that records how many calls are in flight at once."""
        state = {"in_flight": 0, "max_in_flight": 0}

        async def slow(result):
            state["in_flight"] += 1
            state["max_in_flight"] = max(state["max_in_flight"], state["in_flight"])
            await asyncio.sleep(0.01)
            state["in_flight"] -= 1
            return result

        async def launch_pad(launch_pad_id):
            return await slow(LaunchPad(id=launch_pad_id, name="Launchpad 1"))

        async def launches(launch_pad_id, launch_date):
            return await slow([make_launch("Launch 1"), make_launch("Launch 2")])

        service = Mock()
        service.get_launch_pad_for_id = AsyncMock(side_effect=launch_pad)
        service.get_launches_for_date = AsyncMock(side_effect=launches)
        service.state = state
        return service

    @pytest.mark.asyncio
    async def test_concurrent_past_launch_lookups(self, slow_upstream, fixed_clock):
        cache = CachedLaunchDataService(slow_upstream, fixed_clock)

        results = await asyncio.gather(*[
            cache.get_launches_for_date("1", date(2025, 11, 21)) for _ in range(self.CALLERS)
        ])

        assert all(result == results[0] for result in results)
        assert [launch.name for launch in results[0]] == ["Launch 1", "Launch 2"]
        assert cache.cached_launch_list_count == 1
        # upstream calls overlapped, so the lock is released while awaiting upstream
        assert slow_upstream.state["max_in_flight"] > 1

        calls_before = slow_upstream.get_launches_for_date.await_count
        assert await cache.get_launches_for_date("1", date(2025, 11, 21)) == results[0]
        assert slow_upstream.get_launches_for_date.await_count == calls_before

    @pytest.mark.asyncio
    async def test_concurrent_launch_pad_lookups(self, slow_upstream, fixed_clock):
        cache = CachedLaunchDataService(slow_upstream, fixed_clock)

        results = await asyncio.gather(*[
            cache.get_launch_pad_for_id("1") for _ in range(self.CALLERS)
        ])

        assert all(result == LaunchPad(id="1", name="Launchpad 1") for result in results)
        assert cache.cached_launch_pad_count == 1
        assert slow_upstream.state["max_in_flight"] > 1

        calls_before = slow_upstream.get_launch_pad_for_id.await_count
        await cache.get_launch_pad_for_id("1")
        assert slow_upstream.get_launch_pad_for_id.await_count == calls_before

    @pytest.mark.asyncio
    async def test_concurrent_mixed_keys(self, slow_upstream, fixed_clock):
        cache = CachedLaunchDataService(slow_upstream, fixed_clock)
        days = [date(2025, 11, day) for day in range(1, 6)]

        await asyncio.gather(
            *[cache.get_launches_for_date(pad_id, day) for pad_id in ("1", "2") for day in days],
            *[cache.get_launch_pad_for_id(pad_id) for pad_id in ("1", "2", "3")],
        )

        assert cache.cached_launch_list_count == 10
        assert cache.cached_launch_pad_count == 3
