import asyncio
from typing import Awaitable, Callable, Dict, Hashable, Optional, Tuple, TypeVar

from loguru import logger

from leaguedata.models.enums import ResourceKind
from leaguedata.models.league import LeagueUrls
from leaguedata.normalization.tabular import Rows
from leaguedata.utils.misc_utils import league_key

T = TypeVar("T")


class LeagueCache:
    """Per-run cache of resolved league URLs and parsed resource rows.

    Owned by one run context rather than held in module state. Concurrent
    first requests for the same entry share a single in-flight load
    (resolve once, fan out reads); failed loads are not cached. Only the
    parsed rows are stored, never the entities built from them.
    """

    def __init__(self):
        self._urls: Dict[str, LeagueUrls] = {}
        self._rows: Dict[Tuple[str, ResourceKind], Rows] = {}
        self._inflight: Dict[Tuple[str, Hashable], "asyncio.Task"] = {}
        self._generation: Dict[str, int] = {}

    def cached_rows(self, league_name: str, kind: ResourceKind) -> Optional[Rows]:
        return self._rows.get((league_key(league_name), kind))

    async def get_urls(
        self, league_name: str, loader: Callable[[], Awaitable[LeagueUrls]]
    ) -> LeagueUrls:
        key = league_key(league_name)
        if key in self._urls:
            return self._urls[key]
        return await self._single_flight(
            key, "urls", loader, lambda urls: self._urls.__setitem__(key, urls)
        )

    async def get_rows(
        self,
        league_name: str,
        kind: ResourceKind,
        loader: Callable[[], Awaitable[Rows]],
    ) -> Rows:
        key = league_key(league_name)
        if (key, kind) in self._rows:
            return self._rows[(key, kind)]
        return await self._single_flight(
            key, kind, loader, lambda rows: self._rows.__setitem__((key, kind), rows)
        )

    async def _single_flight(
        self,
        key: str,
        entry: Hashable,
        loader: Callable[[], Awaitable[T]],
        store: Callable[[T], None],
    ) -> T:
        flight_key = (key, entry)
        task = self._inflight.get(flight_key)
        if task is None:
            generation = self._generation.get(key, 0)

            async def _load_and_store() -> T:
                try:
                    value = await loader()
                    # Entries invalidated mid-flight are returned but not kept
                    if self._generation.get(key, 0) == generation:
                        store(value)
                    return value
                finally:
                    if self._inflight.get(flight_key) is asyncio.current_task():
                        del self._inflight[flight_key]

            task = asyncio.create_task(_load_and_store())
            self._inflight[flight_key] = task
        else:
            logger.debug(f"Joining in-flight load of {entry} for league '{key}'")
        return await asyncio.shield(task)

    def invalidate(self, league_name: str) -> None:
        """Drops every cached entry for one league."""
        key = league_key(league_name)
        self._generation[key] = self._generation.get(key, 0) + 1
        self._urls.pop(key, None)
        for cached in [k for k in self._rows if k[0] == key]:
            del self._rows[cached]
        for flight in [k for k in self._inflight if k[0] == key]:
            del self._inflight[flight]
        logger.debug(f"Invalidated cache for league '{key}'")
