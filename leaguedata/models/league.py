from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .division import Conference, Division
from .enums import ResourceKind
from .game import Schedule
from .stats import GoalieStatLine, PlayerStatLine
from .team import StandingsRow, Team


class LeagueUrls(BaseModel):
    """Resource locations for one league, as read from the master registry."""

    model_config = ConfigDict(frozen=True)

    league_name: str
    division_url: str
    team_url: str
    schedule_url: str
    standings_url: str
    goalie_url: str
    player_url: str
    playoff_goalie_url: Optional[str] = None
    playoff_player_url: Optional[str] = None

    def url_for(self, kind: ResourceKind) -> Optional[str]:
        return {
            ResourceKind.DIVISION_INFO: self.division_url,
            ResourceKind.TEAM_INFO: self.team_url,
            ResourceKind.SCHEDULE: self.schedule_url,
            ResourceKind.STANDINGS: self.standings_url,
            ResourceKind.GOALIE_STATS: self.goalie_url,
            ResourceKind.PLAYER_STATS: self.player_url,
            ResourceKind.PLAYOFF_GOALIE_STATS: self.playoff_goalie_url,
            ResourceKind.PLAYOFF_PLAYER_STATS: self.playoff_player_url,
        }[kind]


class LeagueData(BaseModel):
    """Everything loaded for one league in one run.

    An empty collection whose resource is listed in ``unavailable`` means the
    data could not be loaded, not that the league has none.
    """

    league_name: str
    divisions: List[Division] = []
    conferences: List[Conference] = []
    teams: List[Team] = []
    standings: List[StandingsRow] = []
    schedule: Schedule = Schedule()
    player_stats: List[PlayerStatLine] = []
    goalie_stats: List[GoalieStatLine] = []
    playoff_player_stats: List[PlayerStatLine] = []
    playoff_goalie_stats: List[GoalieStatLine] = []
    unavailable: List[ResourceKind] = []

    def is_available(self, kind: ResourceKind) -> bool:
        return kind not in self.unavailable
