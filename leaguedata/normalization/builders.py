"""Entity builders: parsed sheet rows -> normalized entity records.

Each builder is a pure function of the parsed rows (plus, for the schedule,
the already-built division list). A row that cannot be normalized is logged
and skipped; it never aborts the rest of the sheet.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Set, TypeVar

from loguru import logger
from pydantic import ValidationError

from leaguedata.models.division import Conference, Division
from leaguedata.models.enums import GameType
from leaguedata.models.game import Game, Schedule
from leaguedata.models.stats import GoalieStatLine, PlayerStatLine
from leaguedata.models.team import StandingsRow, Team
from leaguedata.normalization.joins import resolve_division
from leaguedata.normalization.tabular import (
    SCHEDULE_HEADER_ROW,
    HeaderIndex,
    Rows,
    cell_at,
    header_index_at,
    schedule_metadata_cells,
)
from leaguedata.utils.misc_utils import (
    normalize_color,
    normalize_name,
    parse_week,
    to_float,
    to_int,
    to_optional_int,
    to_percentage,
)

T = TypeVar("T")

BACKUP_GOALIE_PLACEHOLDER = "backup goalie"

# Division and team sheets are read by position (see tabular.cell_at).
DIVISION_CONFERENCE, DIVISION_NAME, DIVISION_ABBREVIATION = 0, 1, 2
DIVISION_COLOR1, DIVISION_COLOR2, DIVISION_LOCATION, DIVISION_SHORT = 3, 4, 5, 6
# The conference's time zone shares the division sheet's fifth column.
CONFERENCE_TIME_ZONE = DIVISION_COLOR2

TEAM_CONFERENCE, TEAM_DIVISION, TEAM_ABBREVIATION = 0, 1, 2
TEAM_CITY, TEAM_NAME, TEAM_COLOR1, TEAM_COLOR2, TEAM_FULL_NAME = 3, 4, 5, 6, 7


def _build_rows(
    rows: Sequence[Sequence[str]],
    build: Callable[[Sequence[str]], Optional[T]],
    entity: str,
) -> List[T]:
    """Applies ``build`` to every data row, skipping rows it rejects or that
    fail validation."""
    built: List[T] = []
    for line_number, row in enumerate(rows):
        if not row:
            continue
        try:
            item = build(row)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Skipping malformed {entity} row {line_number}: {e}")
            continue
        if item is not None:
            built.append(item)
    return built


def build_divisions(rows: Rows) -> List[Division]:
    """Builds divisions from the division resource (header on row 0)."""
    seen_abbreviations: Set[str] = set()

    def _division(row: Sequence[str]) -> Optional[Division]:
        conference = cell_at(row, DIVISION_CONFERENCE)
        name = cell_at(row, DIVISION_NAME)
        if not conference and not name:
            return None
        abbreviation = cell_at(row, DIVISION_ABBREVIATION)
        if abbreviation and abbreviation.upper() in seen_abbreviations:
            logger.warning(
                f"Duplicate division abbreviation '{abbreviation}' for {conference} {name}; row dropped."
            )
            return None
        if abbreviation:
            seen_abbreviations.add(abbreviation.upper())
        return Division(
            conference=conference,
            name=name,
            abbreviation=abbreviation,
            color1=normalize_color(cell_at(row, DIVISION_COLOR1)),
            color2=normalize_color(cell_at(row, DIVISION_COLOR2)),
            short_label=cell_at(row, DIVISION_SHORT),
        )

    divisions = _build_rows(rows[1:], _division, "division")
    logger.success(f"Built {len(divisions)} divisions")
    return divisions


def build_conferences(rows: Rows) -> List[Conference]:
    """Derives conferences from the division resource; first occurrence wins."""
    conferences: List[Conference] = []
    seen: Set[str] = set()
    for row in rows[1:]:
        name = cell_at(row, DIVISION_CONFERENCE)
        if not name or name in seen:
            continue
        seen.add(name)
        conferences.append(
            Conference(
                name=name,
                color=normalize_color(cell_at(row, DIVISION_COLOR1)),
                time_zone=cell_at(row, CONFERENCE_TIME_ZONE),
                location=cell_at(row, DIVISION_LOCATION),
            )
        )
    logger.success(f"Built {len(conferences)} conferences")
    return conferences


def build_teams(rows: Rows) -> List[Team]:
    """Builds teams from the team resource (header on row 0)."""

    def _team(row: Sequence[str]) -> Optional[Team]:
        city = cell_at(row, TEAM_CITY)
        name = cell_at(row, TEAM_NAME)
        full_name = cell_at(row, TEAM_FULL_NAME) or f"{city} {name}".strip()
        if not full_name:
            return None
        return Team(
            conference=cell_at(row, TEAM_CONFERENCE),
            division=cell_at(row, TEAM_DIVISION),
            abbreviation=cell_at(row, TEAM_ABBREVIATION),
            city=city,
            name=name,
            full_name=full_name,
            color1=normalize_color(cell_at(row, TEAM_COLOR1)),
            color2=normalize_color(cell_at(row, TEAM_COLOR2)),
        )

    teams = _build_rows(rows[1:], _team, "team")
    logger.success(f"Built {len(teams)} teams")
    return teams


def build_standings(rows: Rows) -> List[StandingsRow]:
    """Builds standings rows; rows without a team name are dropped."""
    if not rows:
        logger.info("Standings resource is empty; built 0 standings rows")
        return []
    header = header_index_at(rows, 0)

    def _standings(row: Sequence[str]) -> Optional[StandingsRow]:
        full_team = header.get(row, "Team Name")
        if not full_team:
            return None
        return StandingsRow(
            team_full_name=full_team,
            division=header.get(row, "Division"),
            games_played=to_int(header.get(row, "GP")),
            wins=to_int(header.get(row, "W")),
            overtime_wins=to_int(header.get(row, "OTW")),
            overtime_losses=to_int(header.get(row, "OTL")),
            losses=to_int(header.get(row, "L")),
            points=to_int(header.get(row, "PTS")),
            goal_differential=to_int(header.get(row, "DIFF")),
            win_percentage=to_percentage(header.get(row, "P%")),
            goals_for=to_int(header.get(row, "GF")),
            goals_against=to_int(header.get(row, "GA")),
            rank=to_optional_int(header.get(row, "RANK")),
        )

    standings = _build_rows(rows[1:], _standings, "standings")
    logger.success(f"Built {len(standings)} standings rows")
    return standings


def build_player_stats(rows: Rows) -> List[PlayerStatLine]:
    """Builds skater stat lines; rows without a team are dropped."""
    if not rows:
        return []
    header = header_index_at(rows, 0)

    def _player(row: Sequence[str]) -> Optional[PlayerStatLine]:
        team_name = header.get(row, "Team")
        if not team_name:
            return None
        return PlayerStatLine(
            first_name=header.get(row, "First Name"),
            last_name=header.get(row, "Last Name"),
            team_name=team_name,
            division=header.get(row, "Division"),
            goals=to_int(header.get(row, "G")),
            assists=to_int(header.get(row, "A")),
            points=to_int(header.get(row, "PTS")),
            points_per_game=to_float(header.get(row, "PTS/GP")),
        )

    players = _build_rows(rows[1:], _player, "player stats")
    logger.success(f"Built {len(players)} player stat lines")
    return players


def is_backup_goalie(first_name: str, last_name: str) -> bool:
    return normalize_name(f"{first_name} {last_name}") == BACKUP_GOALIE_PLACEHOLDER


def build_goalie_stats(rows: Rows) -> List[GoalieStatLine]:
    """Builds goalie stat lines, dropping "Backup Goalie" placeholders and
    rows without a team."""
    if not rows:
        return []
    header = header_index_at(rows, 0)

    def _goalie(row: Sequence[str]) -> Optional[GoalieStatLine]:
        first_name = header.get(row, "First Name")
        last_name = header.get(row, "Last Name")
        if is_backup_goalie(first_name, last_name):
            return None
        team_name = header.get(row, "Team")
        if not team_name:
            return None
        return GoalieStatLine(
            first_name=first_name,
            last_name=last_name,
            team_name=team_name,
            division=header.get(row, "Division"),
            goals_against=to_int(header.get(row, "GA")),
            goals_against_average=to_float(header.get(row, "GAA"), default=None),
            games_played=to_int(header.get(row, "GP")),
        )

    goalies = _build_rows(rows[1:], _goalie, "goalie stats")
    logger.success(f"Built {len(goalies)} goalie stat lines")
    return goalies


def _game(
    row: Sequence[str], header: HeaderIndex, divisions: Iterable[Division]
) -> Optional[Game]:
    week = parse_week(header.get(row, "Week"))
    if week is None:
        return None

    game_type = GameType.from_label(header.get(row, "Game Type"))
    is_playoff = game_type is GameType.PLAYOFF
    return Game(
        week=week,
        game_type=game_type,
        season=header.get(row, "Season"),
        date=header.get(row, "Date"),
        date_short=header.get(row, "Date Short"),
        day=header.get(row, "Day"),
        time=header.get(row, "Time"),
        team1=header.get(row, "Team 1"),
        team2=header.get(row, "Team 2"),
        division1=resolve_division(header.get(row, "Div 1"), divisions),
        division2=resolve_division(header.get(row, "Div 2"), divisions),
        score1=to_optional_int(header.get(row, "Score 1")),
        score1_text=header.get(row, "Score 1"),
        score2=to_optional_int(header.get(row, "Score 2")),
        status=header.get(row, "Final"),
        location=header.get(row, "Location"),
        seed1=to_optional_int(header.get(row, "Seed 1")) if is_playoff else None,
        seed2=to_optional_int(header.get(row, "Seed 2")) if is_playoff else None,
        round=(header.get(row, "Round") or None) if is_playoff else None,
    )


def build_schedule(rows: Rows, divisions: Sequence[Division]) -> Schedule:
    """Builds the schedule and joins each game's division labels.

    Rows 0-1 carry the current week/year metadata and row 2 is the header.
    Games whose week is unparseable or negative are discarded.
    """
    week_cell, year_cell = schedule_metadata_cells(rows)
    week = to_int(week_cell)
    year = to_int(year_cell)

    header = header_index_at(rows, SCHEDULE_HEADER_ROW)
    games = _build_rows(
        rows[SCHEDULE_HEADER_ROW + 1 :],
        lambda row: _game(row, header, divisions),
        "schedule",
    )

    unmatched = sum(1 for game in games if not game.division1.is_resolved)
    if unmatched:
        logger.debug(f"{unmatched} games have a division label with no matching division")

    logger.success(f"Built {len(games)} schedule games (Week {week}, Year {year})")
    return Schedule(week=week, year=year, games=games)
