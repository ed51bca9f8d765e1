from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field


def _join_name(first: Optional[str], last: Optional[str]) -> Optional[str]:
    if first is None and last is None:
        return None
    return f"{first or ''} {last or ''}"


class PlayerStatLine(BaseModel):
    """A skater's season line. The all-None/zero instance is the null player."""

    model_config = ConfigDict(frozen=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    team_name: Optional[str] = None
    division: Optional[str] = None
    goals: int = 0
    assists: int = 0
    points: int = 0
    points_per_game: float = 0.0

    @computed_field  # type: ignore[misc]
    @property
    def full_name(self) -> Optional[str]:
        return _join_name(self.first_name, self.last_name)

    @classmethod
    def null(cls) -> "PlayerStatLine":
        return cls()

    @property
    def is_null(self) -> bool:
        return self.full_name is None


class GoalieStatLine(BaseModel):
    """A goalie's season line. The all-None/zero instance is the null goalie."""

    model_config = ConfigDict(frozen=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    team_name: Optional[str] = None
    division: Optional[str] = None
    goals_against: int = 0
    goals_against_average: Optional[float] = 0.0  # None when the sheet has no average
    games_played: int = 0

    @computed_field  # type: ignore[misc]
    @property
    def full_name(self) -> Optional[str]:
        return _join_name(self.first_name, self.last_name)

    @classmethod
    def null(cls) -> "GoalieStatLine":
        return cls()

    @property
    def is_null(self) -> bool:
        return self.full_name is None
