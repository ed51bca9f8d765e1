from enum import Enum


class GameType(str, Enum):
    REGULAR_SEASON = "Regular Season"
    PLAYOFF = "Playoffs"

    @classmethod
    def from_label(cls, label: str) -> "GameType":
        """Maps the sheet's free-text game type onto the closed variant."""
        if str(label or "").strip().lower() in ("playoffs", "playoff"):
            return cls.PLAYOFF
        return cls.REGULAR_SEASON


class ResourceKind(str, Enum):
    """Per-league resources, valued by their column name in the master registry."""

    DIVISION_INFO = "DIVISION INFO"
    TEAM_INFO = "TEAM INFO"
    SCHEDULE = "SCHEDULE"
    STANDINGS = "STANDINGS"
    GOALIE_STATS = "GOALIE STATS"
    PLAYER_STATS = "PLAYER STATS"
    PLAYOFF_GOALIE_STATS = "PLAYOFF GOALIE STATS"
    PLAYOFF_PLAYER_STATS = "PLAYOFF PLAYER STATS"


REQUIRED_RESOURCES = (
    ResourceKind.DIVISION_INFO,
    ResourceKind.TEAM_INFO,
    ResourceKind.SCHEDULE,
    ResourceKind.STANDINGS,
    ResourceKind.GOALIE_STATS,
    ResourceKind.PLAYER_STATS,
)


class ChunkPolicy(str, Enum):
    BALANCED = "balanced"  # equal chunks, remainder absorbed by the last
    HEAD_HEAVY = "head_heavy"  # two halves, larger half first


class ScheduleDocType(str, Enum):
    FINAL_SCORES = "Final Scores"
    UPCOMING_GAMES = "Upcoming Games"
