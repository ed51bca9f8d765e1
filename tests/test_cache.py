import asyncio

import pytest

from leaguedata.models.enums import ResourceKind
from leaguedata.sources.cache import LeagueCache


class CountingLoader:
    def __init__(self, value, fail=False):
        self.value = value
        self.fail = fail
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0)
        if self.fail:
            raise RuntimeError("load failed")
        return self.value


def test_concurrent_first_requests_share_one_load():
    cache = LeagueCache()
    loader = CountingLoader([["a", "b"]])

    async def fetch_many():
        return await asyncio.gather(
            *(cache.get_rows("Test League", ResourceKind.SCHEDULE, loader) for _ in range(4))
        )

    results = asyncio.run(fetch_many())
    assert loader.calls == 1
    assert all(rows == [["a", "b"]] for rows in results)
    assert cache.cached_rows("test league", ResourceKind.SCHEDULE) == [["a", "b"]]


def test_entries_are_keyed_by_resource():
    cache = LeagueCache()
    schedule = CountingLoader([["s"]])
    standings = CountingLoader([["t"]])

    async def fetch():
        await cache.get_rows("L", ResourceKind.SCHEDULE, schedule)
        await cache.get_rows("L", ResourceKind.STANDINGS, standings)
        await cache.get_rows("L", ResourceKind.SCHEDULE, schedule)

    asyncio.run(fetch())
    assert (schedule.calls, standings.calls) == (1, 1)


def test_failed_loads_are_not_cached():
    cache = LeagueCache()
    loader = CountingLoader([["x"]], fail=True)
    with pytest.raises(RuntimeError):
        asyncio.run(cache.get_rows("L", ResourceKind.TEAM_INFO, loader))
    assert cache.cached_rows("L", ResourceKind.TEAM_INFO) is None

    loader.fail = False
    assert asyncio.run(cache.get_rows("L", ResourceKind.TEAM_INFO, loader)) == [["x"]]
    assert loader.calls == 2


def test_invalidate_forces_a_fresh_load():
    cache = LeagueCache()
    loader = CountingLoader([["x"]])
    other = CountingLoader([["y"]])

    async def fetch():
        await cache.get_rows("L", ResourceKind.SCHEDULE, loader)
        await cache.get_rows("Other", ResourceKind.SCHEDULE, other)
        cache.invalidate("L")
        await cache.get_rows("L", ResourceKind.SCHEDULE, loader)
        await cache.get_rows("Other", ResourceKind.SCHEDULE, other)

    asyncio.run(fetch())
    assert loader.calls == 2
    assert other.calls == 1


def test_load_landing_after_invalidation_is_not_kept():
    cache = LeagueCache()
    release = None

    async def slow_loader():
        await release.wait()
        return [["stale"]]

    async def scenario():
        nonlocal release
        release = asyncio.Event()
        pending = asyncio.create_task(
            cache.get_rows("L", ResourceKind.SCHEDULE, slow_loader)
        )
        await asyncio.sleep(0)
        cache.invalidate("L")
        release.set()
        return await pending

    assert asyncio.run(scenario()) == [["stale"]]
    assert cache.cached_rows("L", ResourceKind.SCHEDULE) is None

