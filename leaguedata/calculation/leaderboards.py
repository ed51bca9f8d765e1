"""Fixed-size stat leaderboards.

Selection is slot by slot rather than a global sort: for each slot the whole
pool is scanned and a candidate replaces the current holder only when it is
strictly better and does not already hold an earlier slot. On an exact tie
the first candidate encountered keeps the slot.

Slots nobody qualifies for hold the null sentinel (names None, numbers 0).
Renderers must check ``is_null`` before formatting names.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Hashable, Iterable, List, Optional, Sequence, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict

from leaguedata.config.settings import settings
from leaguedata.models.stats import GoalieStatLine, PlayerStatLine

T = TypeVar("T")

# A goalie must beat this GAA to take an empty slot.
GAA_CEILING = 99.0


@dataclass(frozen=True)
class StatKey:
    """One ranking criterion: a numeric attribute and its direction."""

    field: str
    descending: bool = True

    def value(self, item) -> float:
        raw = getattr(item, self.field)
        if raw is None:
            # a missing stat ranks below every real value
            return -math.inf if self.descending else math.inf
        return float(raw)

    def better(self, a: float, b: float) -> bool:
        return a > b if self.descending else a < b

    @property
    def default_floor(self) -> float:
        return 0.0 if self.descending else math.inf


POINTS = StatKey("points")
GOALS = StatKey("goals")
POINTS_PER_GAME = StatKey("points_per_game")
GOALS_AGAINST_AVERAGE = StatKey("goals_against_average", descending=False)


def _full_name(item) -> Hashable:
    return item.full_name


def _beats(candidate: Sequence[float], holder: Sequence[float], keys: Sequence[StatKey]) -> bool:
    for key, c, h in zip(keys, candidate, holder):
        if key.better(c, h):
            return True
        if c != h:
            return False
    return False


def select_ranked(
    pool: Iterable[T],
    n: int,
    keys: Sequence[StatKey],
    floor: Optional[Sequence[float]] = None,
    identity: Callable[[T], Hashable] = _full_name,
    eligible: Optional[Callable[[T], bool]] = None,
) -> List[Optional[T]]:
    """Fills ``n`` slots by repeated scans of the pool.

    ``floor`` holds the values a candidate must strictly beat to take an
    empty slot; with no floor any unplaced candidate takes it. Unfilled
    slots are None.
    """
    candidates = [item for item in pool if eligible is None or eligible(item)]
    slots: List[Optional[T]] = []
    placed = set()
    for _ in range(n):
        holder: Optional[T] = None
        holder_values = tuple(floor) if floor is not None else None
        for candidate in candidates:
            if identity(candidate) in placed:
                continue
            values = tuple(key.value(candidate) for key in keys)
            if holder_values is None or _beats(values, holder_values, keys):
                holder, holder_values = candidate, values
        slots.append(holder)
        if holder is not None:
            placed.add(identity(holder))
    return slots


def top_n(
    pool: Iterable[T],
    n: int,
    ranking_key: StatKey,
    tie_break_key: Optional[StatKey] = None,
    *,
    sentinel: T,
    floor: Optional[Sequence[float]] = None,
    eligible: Optional[Callable[[T], bool]] = None,
) -> List[T]:
    """Returns exactly ``n`` leaders, padding unfilled slots with ``sentinel``."""
    keys = [ranking_key] + ([tie_break_key] if tie_break_key else [])
    if floor is None:
        floor = [key.default_floor for key in keys]
    slots = select_ranked(pool, n, keys, floor=floor, eligible=eligible)
    return [sentinel if slot is None else slot for slot in slots]


def points_leaders(
    players: Iterable[PlayerStatLine], n: Optional[int] = None
) -> List[PlayerStatLine]:
    """Top point scorers; ties on points go to the player with more goals."""
    return top_n(
        players,
        settings.points_leaders if n is None else n,
        POINTS,
        GOALS,
        sentinel=PlayerStatLine.null(),
    )


def goals_leaders(
    players: Iterable[PlayerStatLine], n: Optional[int] = None
) -> List[PlayerStatLine]:
    return top_n(
        players,
        settings.goals_leaders if n is None else n,
        GOALS,
        sentinel=PlayerStatLine.null(),
    )


def points_per_game_leaders(
    players: Iterable[PlayerStatLine], n: Optional[int] = None
) -> List[PlayerStatLine]:
    return top_n(
        players,
        settings.ppg_leaders if n is None else n,
        POINTS_PER_GAME,
        sentinel=PlayerStatLine.null(),
    )


def gaa_min_games_played(
    goalies: Iterable[GoalieStatLine], ratio: Optional[float] = None
) -> int:
    """Games a goalie needs to qualify for the GAA board:
    ceil(ratio x the pool's most games played)."""
    ratio = settings.gaa_min_games_ratio if ratio is None else ratio
    max_games = max((goalie.games_played for goalie in goalies), default=0)
    # Decimal so float error cannot push an exact product past a whole number
    return math.ceil(Decimal(str(ratio)) * max_games)


def gaa_leaders(
    goalies: Sequence[GoalieStatLine],
    n: Optional[int] = None,
    ratio: Optional[float] = None,
) -> List[GoalieStatLine]:
    """Lowest goals-against averages among goalies at or above the games floor."""
    min_games = gaa_min_games_played(goalies, ratio)
    return top_n(
        goalies,
        settings.gaa_leaders if n is None else n,
        GOALS_AGAINST_AVERAGE,
        sentinel=GoalieStatLine.null(),
        floor=[GAA_CEILING],
        eligible=lambda goalie: goalie.games_played >= min_games,
    )


class StatLeaders(BaseModel):
    """All leaderboards for one division's stat pool."""

    model_config = ConfigDict(frozen=True)

    division: str
    points: List[PlayerStatLine]
    goals: List[PlayerStatLine]
    points_per_game: List[PlayerStatLine]
    goals_against_average: List[GoalieStatLine]
    gaa_min_games_played: int


def compute_stat_leaders(
    players: Sequence[PlayerStatLine],
    goalies: Sequence[GoalieStatLine],
    division: str = "",
) -> StatLeaders:
    return StatLeaders(
        division=division,
        points=points_leaders(players),
        goals=goals_leaders(players),
        points_per_game=points_per_game_leaders(players),
        goals_against_average=gaa_leaders(goalies),
        gaa_min_games_played=gaa_min_games_played(goalies),
    )


def division_stat_leaders(
    players: Iterable[PlayerStatLine],
    goalies: Iterable[GoalieStatLine],
    division_label: str,
    min_players: Optional[int] = None,
) -> Optional[StatLeaders]:
    """Leaders for one "{conference} {division}" pool.

    Returns None when the division has too few player lines to fill a board.
    """
    min_players = settings.min_division_players if min_players is None else min_players
    division_players = [p for p in players if p.division == division_label]
    if len(division_players) < min_players:
        logger.info(
            f"Skipping stat leaders for {division_label}: "
            f"{len(division_players)} players (< {min_players})"
        )
        return None
    division_goalies = [g for g in goalies if g.division == division_label]
    return compute_stat_leaders(division_players, division_goalies, division_label)
