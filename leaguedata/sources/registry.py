from typing import Optional

from loguru import logger

from leaguedata.config.settings import settings
from leaguedata.models.enums import ResourceKind
from leaguedata.models.league import LeagueUrls
from leaguedata.normalization.tabular import header_index_at, parse_delimited
from leaguedata.sources.base_source import (
    ConfigurationError,
    FetchError,
    ResourceFetcher,
)
from leaguedata.sources.cache import LeagueCache

LEAGUE_COLUMN = "LEAGUE"


def _not_found(league_name: str) -> ConfigurationError:
    return ConfigurationError(
        f'League "{league_name}" not found or incomplete in master registry'
    )


class LeagueRegistryResolver:
    """Resolves a league name to its resource locations via the master registry.

    Every failure (blank name, registry unreachable or empty, no row, a blank
    required column) surfaces as one ConfigurationError: a partially
    configured league is treated the same as a missing one.
    """

    def __init__(
        self,
        fetcher: ResourceFetcher,
        cache: LeagueCache,
        registry_url: Optional[str] = None,
    ):
        self.fetcher = fetcher
        self.cache = cache
        self.registry_url = registry_url or settings.master_registry_url

    async def resolve(self, league_name: str) -> LeagueUrls:
        league_name = str(league_name or "").strip()
        if not league_name:
            raise ConfigurationError(
                "League name is empty; cannot resolve a row in the master registry"
            )
        return await self.cache.get_urls(
            league_name, lambda: self._resolve_uncached(league_name)
        )

    async def _resolve_uncached(self, league_name: str) -> LeagueUrls:
        logger.info(f"Resolving league '{league_name}' from master registry")
        try:
            text = await self.fetcher.fetch_text(self.registry_url)
        except FetchError as e:
            logger.error(f"Master registry fetch failed: {e}")
            raise _not_found(league_name) from e

        rows = parse_delimited(text)
        if not rows:
            logger.error("Master registry is empty")
            raise _not_found(league_name)

        header = header_index_at(rows, 0)
        wanted = league_name.lower()
        for row in rows[1:]:
            league_cell = header.get(row, LEAGUE_COLUMN).strip()
            if not league_cell or league_cell.lower() != wanted:
                continue

            def column(kind: ResourceKind) -> str:
                return header.get(row, kind.value).strip()

            urls = {
                "division_url": column(ResourceKind.DIVISION_INFO),
                "team_url": column(ResourceKind.TEAM_INFO),
                "schedule_url": column(ResourceKind.SCHEDULE),
                "standings_url": column(ResourceKind.STANDINGS),
                "goalie_url": column(ResourceKind.GOALIE_STATS),
                "player_url": column(ResourceKind.PLAYER_STATS),
            }
            missing = [name for name, value in urls.items() if not value]
            if missing:
                logger.error(
                    f"League '{league_name}' is missing registry columns: {missing}"
                )
                raise _not_found(league_name)

            resolved = LeagueUrls(
                league_name=league_cell,
                playoff_goalie_url=column(ResourceKind.PLAYOFF_GOALIE_STATS) or None,
                playoff_player_url=column(ResourceKind.PLAYOFF_PLAYER_STATS) or None,
                **urls,
            )
            logger.success(f"Resolved league '{league_name}' from master registry")
            return resolved

        logger.error(f"League '{league_name}' has no row in the master registry")
        raise _not_found(league_name)
