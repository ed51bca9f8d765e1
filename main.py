import sys
import asyncio

# --- Settings/Logging ---
from leaguedata.logging.setup import setup_logging
from leaguedata.config.settings import settings

setup_logging()

from loguru import logger

# --- End Settings/Logging ---

from leaguedata.calculation.filters import (
    active_divisions,
    division_context,
    group_schedule,
)
from leaguedata.calculation.leaderboards import division_stat_leaders
from leaguedata.calculation.standings import division_standings, standings_pages
from leaguedata.models.enums import REQUIRED_RESOURCES, ResourceKind
from leaguedata.models.league import LeagueData
from leaguedata.sources.league_loader import LeagueLoader
from leaguedata.utils.misc_utils import sanitize_last_name, truncate_label

from rich import print
from rich.panel import Panel
from rich.table import Table


def summarize(data: LeagueData) -> None:
    """Prints what a renderer would receive for this run."""
    counts = Table(title=f"{data.league_name} - Week {data.schedule.week}, {data.schedule.year}")
    counts.add_column("Collection")
    counts.add_column("Records", justify="right")
    counts.add_column("Status")
    for name, records, kind in [
        ("Divisions", data.divisions, ResourceKind.DIVISION_INFO),
        ("Conferences", data.conferences, ResourceKind.DIVISION_INFO),
        ("Teams", data.teams, ResourceKind.TEAM_INFO),
        ("Standings", data.standings, ResourceKind.STANDINGS),
        ("Games", data.schedule.games, ResourceKind.SCHEDULE),
        ("Player stats", data.player_stats, ResourceKind.PLAYER_STATS),
        ("Goalie stats", data.goalie_stats, ResourceKind.GOALIE_STATS),
    ]:
        counts.add_row(
            name,
            str(len(records)),
            "[green]ok[/green]" if data.is_available(kind) else "[red]unavailable[/red]",
        )
    print(counts)

    active = active_divisions(data.schedule, data.divisions)
    for entry in active.regular_season:
        division = entry.division
        pages = standings_pages(division_standings(data.standings, division.label))
        leaders = division_stat_leaders(data.player_stats, data.goalie_stats, division.label)
        location, time_zone, _color = division_context(division, data.conferences)
        lines = [
            f"{location or 'TBD'} ({time_zone or '?'})",
            f"{len(entry.games)} active games, {len(pages)} standings page(s)",
        ]
        if leaders:
            top = leaders.points[0]
            if not top.is_null:
                name = f"{top.first_name} {sanitize_last_name(top.last_name)}".strip()
                lines.append(f"Points leader: {name} ({top.points} PTS)")
            lines.append(f"GAA minimum: {leaders.gaa_min_games_played} GP")
        print(Panel("\n".join(lines), title=f"{division.abbreviation} - {truncate_label(division.label)}"))

    groups = group_schedule(data.schedule, data.conferences)
    logger.info(f"{len(groups)} schedule boards for week {data.schedule.week}")


async def main(league_name: str) -> int:
    """Main entry point: load one league and summarize it."""
    logger.info(f"Starting league data run for '{league_name}'")
    logger.debug(f"Master registry: {settings.master_registry_url}")

    loader = LeagueLoader(league_name)
    try:
        data = await loader.load_all()
    finally:
        await loader.close()

    summarize(data)
    if all(kind in data.unavailable for kind in REQUIRED_RESOURCES):
        logger.error("No league data could be loaded.")
        return 1
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python main.py <league name>")
        sys.exit(2)
    try:
        sys.exit(asyncio.run(main(" ".join(sys.argv[1:]))))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
