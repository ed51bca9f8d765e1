import asyncio
from typing import Callable, List, Optional, Set, Tuple, TypeVar

from loguru import logger

from leaguedata.models.division import Conference, Division
from leaguedata.models.enums import REQUIRED_RESOURCES, ResourceKind
from leaguedata.models.game import Schedule
from leaguedata.models.league import LeagueData
from leaguedata.models.stats import GoalieStatLine, PlayerStatLine
from leaguedata.models.team import StandingsRow, Team
from leaguedata.normalization.builders import (
    build_conferences,
    build_divisions,
    build_goalie_stats,
    build_player_stats,
    build_schedule,
    build_standings,
    build_teams,
)
from leaguedata.normalization.tabular import Rows, parse_delimited
from leaguedata.sources.base_source import (
    ConfigurationError,
    FetchError,
    ResourceFetcher,
)
from leaguedata.sources.cache import LeagueCache
from leaguedata.sources.registry import LeagueRegistryResolver

T = TypeVar("T")


class LeagueLoader:
    """Loads one league's data for a run.

    Every ``load_*`` method degrades to an empty collection when its resource
    cannot be fetched, recording the resource in ``unavailable`` so callers
    can tell missing data from an empty league.
    """

    def __init__(
        self,
        league_name: str,
        fetcher: Optional[ResourceFetcher] = None,
        cache: Optional[LeagueCache] = None,
        registry_url: Optional[str] = None,
    ):
        self.league_name = str(league_name or "").strip()
        self.fetcher = fetcher or ResourceFetcher()
        self.cache = cache or LeagueCache()
        self.resolver = LeagueRegistryResolver(self.fetcher, self.cache, registry_url)
        self.unavailable: Set[ResourceKind] = set()

    def start_run(self) -> None:
        """Forces fresh registry and data fetches for this league."""
        self.cache.invalidate(self.league_name)
        self.unavailable.clear()

    async def fetch_rows(self, kind: ResourceKind) -> Rows:
        """Parsed rows of one resource, fetched at most once per run."""
        urls = await self.resolver.resolve(self.league_name)
        location = urls.url_for(kind)
        if not location:
            raise ConfigurationError(
                f'League "{self.league_name}" has no {kind.value} resource configured'
            )

        async def _fetch_and_parse() -> Rows:
            text = await self.fetcher.fetch_text(location)
            return parse_delimited(text)

        return await self.cache.get_rows(self.league_name, kind, _fetch_and_parse)

    async def _load(
        self,
        kind: ResourceKind,
        build: Callable[[Rows], T],
        empty: T,
        entity: str,
    ) -> T:
        try:
            rows = await self.fetch_rows(kind)
            return build(rows)
        except (FetchError, ConfigurationError) as e:
            logger.error(f"Error loading {entity} for '{self.league_name}': {e}")
        except Exception as e:
            logger.exception(
                f"Unexpected error loading {entity} for '{self.league_name}': {e}"
            )
        self.unavailable.add(kind)
        return empty

    async def _is_configured(self, kind: ResourceKind) -> bool:
        try:
            urls = await self.resolver.resolve(self.league_name)
        except ConfigurationError:
            return True  # let _load record the failure
        return urls.url_for(kind) is not None

    async def load_divisions(self) -> List[Division]:
        return await self._load(
            ResourceKind.DIVISION_INFO, build_divisions, [], "division info"
        )

    async def load_conferences(self) -> List[Conference]:
        return await self._load(
            ResourceKind.DIVISION_INFO, build_conferences, [], "conference info"
        )

    async def load_teams(self) -> List[Team]:
        return await self._load(ResourceKind.TEAM_INFO, build_teams, [], "team info")

    async def load_standings(self) -> List[StandingsRow]:
        return await self._load(
            ResourceKind.STANDINGS, build_standings, [], "standings"
        )

    async def load_player_stats(self, playoffs: bool = False) -> List[PlayerStatLine]:
        kind = (
            ResourceKind.PLAYOFF_PLAYER_STATS if playoffs else ResourceKind.PLAYER_STATS
        )
        if playoffs and not await self._is_configured(kind):
            logger.info(f"No playoff player stats configured for '{self.league_name}'")
            return []
        return await self._load(kind, build_player_stats, [], kind.value.lower())

    async def load_goalie_stats(self, playoffs: bool = False) -> List[GoalieStatLine]:
        kind = (
            ResourceKind.PLAYOFF_GOALIE_STATS if playoffs else ResourceKind.GOALIE_STATS
        )
        if playoffs and not await self._is_configured(kind):
            logger.info(f"No playoff goalie stats configured for '{self.league_name}'")
            return []
        return await self._load(kind, build_goalie_stats, [], kind.value.lower())

    async def load_schedule(self) -> Schedule:
        """Loads the schedule, joined against this run's division list."""
        divisions = await self.load_divisions()
        return await self._load(
            ResourceKind.SCHEDULE,
            lambda rows: build_schedule(rows, divisions),
            Schedule(),
            "schedule",
        )

    async def load_league_config(
        self,
    ) -> Tuple[List[Division], List[Conference], List[Team]]:
        """Divisions, conferences and teams, loaded concurrently."""
        divisions, conferences, teams = await asyncio.gather(
            self.load_divisions(), self.load_conferences(), self.load_teams()
        )
        return divisions, conferences, teams

    async def load_all(self, refresh: bool = True) -> LeagueData:
        """Loads every resource of the league.

        The registry is resolved first; the data resources are then fetched
        concurrently.
        """
        if refresh:
            self.start_run()

        logger.info(f"Loading league data for '{self.league_name}'")
        try:
            await self.resolver.resolve(self.league_name)
        except ConfigurationError as e:
            logger.error(f"Cannot load league '{self.league_name}': {e}")
            self.unavailable.update(REQUIRED_RESOURCES)
            return LeagueData(
                league_name=self.league_name, unavailable=list(REQUIRED_RESOURCES)
            )

        (
            (divisions, conferences, teams),
            standings,
            schedule,
            player_stats,
            goalie_stats,
            playoff_player_stats,
            playoff_goalie_stats,
        ) = await asyncio.gather(
            self.load_league_config(),
            self.load_standings(),
            self.load_schedule(),
            self.load_player_stats(),
            self.load_goalie_stats(),
            self.load_player_stats(playoffs=True),
            self.load_goalie_stats(playoffs=True),
        )

        unavailable = [kind for kind in ResourceKind if kind in self.unavailable]
        if unavailable:
            logger.warning(
                f"League '{self.league_name}' loaded without: {[k.value for k in unavailable]}"
            )
        else:
            logger.success(f"League '{self.league_name}' loaded")

        return LeagueData(
            league_name=self.league_name,
            divisions=divisions,
            conferences=conferences,
            teams=teams,
            standings=standings,
            schedule=schedule,
            player_stats=player_stats,
            goalie_stats=goalie_stats,
            playoff_player_stats=playoff_player_stats,
            playoff_goalie_stats=playoff_goalie_stats,
            unavailable=unavailable,
        )

    async def close(self):
        await self.fetcher.close()
