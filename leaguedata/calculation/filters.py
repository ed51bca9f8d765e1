"""Which divisions and games a weekly run covers, and how schedule boards group.

Games are "active" when they fall in the schedule's current week or the week
after (next week's playoff games are announced ahead of time).
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict

from leaguedata.calculation.chunking import chunk
from leaguedata.config.settings import settings
from leaguedata.models.division import Conference, Division
from leaguedata.models.enums import ChunkPolicy, GameType, ScheduleDocType
from leaguedata.models.game import Game, Schedule
from leaguedata.normalization.joins import (
    find_conference,
    find_division_by_abbreviation,
)

ALL_DIVISIONS = "ALL"
DEFAULT_HEADER_COLOR = "ffffff"


def resolve_division_filter(user_input: Optional[str], divisions: Iterable[Division]) -> str:
    """Turns the user's division input into a "{conference} {division}" label.

    Blank input means ALL; a division abbreviation is expanded; anything
    else is returned upper-cased for an exact label match.
    """
    text = str(user_input or "").strip().upper()
    if not text:
        return ALL_DIVISIONS
    division = find_division_by_abbreviation(text, divisions)
    if division is not None:
        return division.label
    return text


class ScheduleFilter(BaseModel):
    """Restricts schedule boards to a conference and optionally one division."""

    model_config = ConfigDict(frozen=True)

    conference: Optional[str] = None
    division_abbreviation: Optional[str] = None

    def accepts(self, game: Game) -> bool:
        if self.conference and game.conference != self.conference:
            return False
        if self.division_abbreviation:
            return game.division1.abbreviation.upper() == self.division_abbreviation.upper()
        return True


def resolve_schedule_filter(
    user_input: Optional[str],
    divisions: Iterable[Division],
    conferences: Iterable[Conference],
) -> ScheduleFilter:
    """Matches the input against division abbreviations first, then conference names."""
    text = str(user_input or "").strip().upper()
    if not text or text == ALL_DIVISIONS:
        return ScheduleFilter()
    division = find_division_by_abbreviation(text, divisions)
    if division is not None:
        return ScheduleFilter(
            conference=division.conference, division_abbreviation=division.abbreviation
        )
    for conference in conferences:
        if conference.name.upper() == text:
            return ScheduleFilter(conference=conference.name)
    logger.warning(f"'{user_input}' matches no division or conference; using all games")
    return ScheduleFilter()


class ActiveDivision(BaseModel):
    """A division with games in the run's window, and those games."""

    model_config = ConfigDict(frozen=True)

    division: Division
    games: List[Game] = []


class ActiveDivisions(BaseModel):
    model_config = ConfigDict(frozen=True)

    regular_season: List[ActiveDivision] = []
    playoff: List[ActiveDivision] = []


def _matches_filter(division: Division, division_filter: str) -> bool:
    return division_filter == ALL_DIVISIONS or division.label == division_filter


def active_divisions(
    schedule: Schedule,
    divisions: Sequence[Division],
    division_filter: str = ALL_DIVISIONS,
    include_all: bool = False,
) -> ActiveDivisions:
    """Divisions to build boards for, split by game type.

    By default a division is active for a game type when it has games of
    that type in the current or next week. ``include_all`` returns every
    division matching the filter regardless of games.
    """
    regular: List[ActiveDivision] = []
    playoff: List[ActiveDivision] = []
    for division in divisions:
        if not _matches_filter(division, division_filter):
            continue
        games = [
            game
            for game in schedule.games
            if game.division_label == division.label and schedule.in_window(game)
        ]
        regular_games = [game for game in games if not game.is_playoff]
        playoff_games = [game for game in games if game.is_playoff]
        if include_all or regular_games:
            regular.append(ActiveDivision(division=division, games=regular_games))
        if include_all or playoff_games:
            playoff.append(ActiveDivision(division=division, games=playoff_games))
    return ActiveDivisions(regular_season=regular, playoff=playoff)


def has_playoff_games(schedule: Schedule, division_label: str) -> bool:
    """Playoff games in the current or next week (a bracket board is due)."""
    return any(
        game.is_playoff
        and game.division_label == division_label
        and schedule.in_window(game)
        for game in schedule.games
    )


def has_regular_season_games(schedule: Schedule, division_label: str) -> bool:
    """Regular-season games in the current week (a standings board is due)."""
    return any(
        not game.is_playoff
        and game.division_label == division_label
        and game.week == schedule.week
        for game in schedule.games
    )


class ScheduleGroup(BaseModel):
    """Games of one conference, date and game type: one schedule board."""

    model_config = ConfigDict(frozen=True)

    conference: str
    date: str
    date_short: str
    game_type: GameType
    season: str
    doc_type: ScheduleDocType
    games: List[Game]
    chunks: List[List[Game]]


def _first_seen_groups(games: Iterable[Game], key) -> List[List[Game]]:
    groups: Dict[object, List[Game]] = {}
    for game in games:
        groups.setdefault(key(game), []).append(game)
    return list(groups.values())


def group_schedule(
    schedule: Schedule,
    conferences: Sequence[Conference],
    schedule_filter: Optional[ScheduleFilter] = None,
    split_threshold: Optional[int] = None,
) -> List[ScheduleGroup]:
    """Groups the active games by conference, then date, then game type.

    A group is a Final Scores board when any of its current-week games has
    a score, otherwise an Upcoming Games board. Groups larger than the
    threshold split into two head-heavy chunks.
    """
    schedule_filter = schedule_filter or ScheduleFilter()
    split_threshold = split_threshold or settings.schedule_split_threshold

    groups: List[ScheduleGroup] = []
    for conference in conferences:
        conference_games = [
            game
            for game in schedule.games
            if game.conference == conference.name
            and schedule.in_window(game)
            and schedule_filter.accepts(game)
        ]
        for day_games in _first_seen_groups(conference_games, lambda g: g.date):
            for type_games in _first_seen_groups(day_games, lambda g: g.game_type):
                first = type_games[0]
                is_final = any(
                    game.week == schedule.week and game.has_score for game in type_games
                )
                groups.append(
                    ScheduleGroup(
                        conference=conference.name,
                        date=first.date,
                        date_short=first.date_short,
                        game_type=first.game_type,
                        season=first.season,
                        doc_type=(
                            ScheduleDocType.FINAL_SCORES
                            if is_final
                            else ScheduleDocType.UPCOMING_GAMES
                        ),
                        games=type_games,
                        chunks=chunk(type_games, split_threshold, ChunkPolicy.HEAD_HEAVY),
                    )
                )

    if not groups:
        logger.warning(f"No games found for week {schedule.week} with the given filter")
    return groups


def division_context(
    division: Division, conferences: Iterable[Conference]
) -> Tuple[str, str, str]:
    """(location, time zone, header colour) a division's boards are labelled with."""
    color = division.color1 or DEFAULT_HEADER_COLOR
    conference = find_conference(division.conference, conferences)
    if conference is None:
        return "", "", color
    return conference.location, conference.time_zone, color
