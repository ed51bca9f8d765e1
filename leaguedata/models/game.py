from typing import List, Optional

from pydantic import BaseModel, ConfigDict, computed_field

from .division import DivisionRef
from .enums import GameType


class Game(BaseModel):
    """Represents a single scheduled game."""

    model_config = ConfigDict(frozen=True)

    week: int
    game_type: GameType = GameType.REGULAR_SEASON
    season: str = ""
    date: str = ""
    date_short: str = ""
    day: str = ""
    time: str = ""
    team1: str = ""
    team2: str = ""
    division1: DivisionRef = DivisionRef()
    division2: DivisionRef = DivisionRef()
    score1: Optional[int] = None  # None until the game has been played
    score2: Optional[int] = None
    score1_text: str = ""  # raw cell; forfeits are marked with text such as "FF"
    status: str = ""
    location: str = ""

    # Playoff games only
    seed1: Optional[int] = None
    seed2: Optional[int] = None
    round: Optional[str] = None

    @property
    def is_playoff(self) -> bool:
        return self.game_type is GameType.PLAYOFF

    @computed_field  # type: ignore[misc]
    @property
    def conference(self) -> str:
        """The game's conference, taken from the first team's division."""
        return self.division1.conference

    @property
    def division_label(self) -> str:
        return self.division1.label

    @property
    def has_score(self) -> bool:
        return self.score1 is not None or bool(self.score1_text.strip())


class Schedule(BaseModel):
    """The schedule resource: current week/year metadata plus every game."""

    model_config = ConfigDict(frozen=True)

    week: int = 0
    year: int = 0
    games: List[Game] = []

    def in_window(self, game: Game) -> bool:
        """True when the game falls in the current or the next week."""
        return game.week in (self.week, self.week + 1)
