from typing import Optional

from pydantic import BaseModel, ConfigDict


class Team(BaseModel):
    """A team from the league's team resource, keyed by its full name."""

    model_config = ConfigDict(frozen=True)

    conference: str
    division: str
    abbreviation: str
    city: str
    name: str
    full_name: str  # join key used by standings, schedule and stats
    color1: Optional[str] = None
    color2: Optional[str] = None


class StandingsRow(BaseModel):
    """One team's line in the standings resource.

    Holds only the full team name; city and nickname come from the Team
    collection (see normalization.joins.find_team).
    """

    model_config = ConfigDict(frozen=True)

    team_full_name: Optional[str] = None
    division: Optional[str] = None
    games_played: int = 0
    wins: int = 0
    overtime_wins: int = 0
    overtime_losses: int = 0
    losses: int = 0
    points: int = 0
    goal_differential: int = 0
    win_percentage: float = 0.0
    goals_for: int = 0
    goals_against: int = 0
    rank: Optional[int] = None
