import httpx
import pytest

from leaguedata.normalization.tabular import parse_delimited
from leaguedata.sources.base_source import ResourceFetcher

REGISTRY_URL = "https://sheets.test/registry.csv"

DIVISIONS_CSV = """Conference,Division,Abbreviation,Color 1,Color 2,Location,Short
Monday,Rec,MR,#FF0000,EST,Rink A,REC
Monday,Competitive,MC,#00FF00,EST,Rink A,COMP
Tuesday,Rec,TR,#0000FF,CST,Rink B,REC
"""

TEAMS_CSV = """Conference,Division,Abbreviation,City,Name,Color 1,Color 2,Full Name
Monday,Rec,ICE,Springfield,Ice Cats,#112233,#445566,Springfield Ice Cats
Monday,Rec,PIG,Shelbyville,Puck Pigs,#aabbcc,,
Tuesday,Rec,BLD,Ogdenville,Blades,,,Ogdenville Blades
"""

SCHEDULE_CSV = """Schedule,,,
Current,,3,2024
Week,Game Type,Season,Date,Date Short,Day,Time,Team 1,Team 2,Div 1,Div 2,Score 1,Score 2,Final,Location,Seed 1,Seed 2,Round
3,Regular Season,Fall,October 1,10/1,Mon,7:00 PM,Springfield Ice Cats,Shelbyville Puck Pigs,Monday Rec,Monday Rec,4,2,Final,Rink A,1,2,Round 1
4,Playoffs,Fall,October 8,10/8,Mon,7:00 PM,Springfield Ice Cats,Shelbyville Puck Pigs,Monday Rec,Monday Rec,,,,Rink A,1,4,Semifinal
abc,Regular Season,Fall,October 1,10/1,Mon,8:00 PM,Bad,Row,Monday Rec,Monday Rec,,,,Rink A,,,
-1,Regular Season,Fall,October 1,10/1,Mon,9:00 PM,Bad,Row,Monday Rec,Monday Rec,,,,Rink A,,,
3,Regular Season,Fall,October 1,10/1,Mon,9:00 PM,Capital Blades,North Snipers,Monday Competitive,Monday Competitive,,,,Rink A,,,
2,Regular Season,Fall,September 24,9/24,Tue,7:00 PM,Ogdenville Blades,Tuesday Tigers,Tuesday Rec,Tuesday Rec,3,3,Final,Rink B,,,
3,Regular Season,Fall,October 2,10/2,Tue,7:00 PM,Ogdenville Blades,Visitors,Exhibition,Exhibition,,,,Rink B,,,
"""

STANDINGS_CSV = """Team Name,Division,GP,W,OTW,OTL,L,PTS,DIFF,P%,GF,GA,RANK
Shelbyville Puck Pigs,Monday Rec,3,1,0,0,2,2,-3,#DIV/0!,5,8,2
Springfield Ice Cats,Monday Rec,3,2,1,0,0,5,3,0.833,8,5,1
,Monday Rec,,,,,,,,,,,
Ogdenville Blades,Tuesday Rec,2,0,0,1,1,1,-2,0.25,4,6,
"""

PLAYERS_CSV = """First Name,Last Name,Team,Division,G,A,PTS,PTS/GP
Ann,Archer,Springfield Ice Cats,Monday Rec,5,5,10,3.33
Ben,Baker,Springfield Ice Cats,Monday Rec,7,3,10,3.33
Cam,Cole,Shelbyville Puck Pigs,Monday Rec,9,0,9,3.0
Dee,Dunn,Shelbyville Puck Pigs,Monday Rec,1,2,3,1.0
Eve,Ely,Springfield Ice Cats,Monday Rec,0,1,1,#DIV/0!
No,Team,,Monday Rec,50,50,100,50
"""

GOALIES_CSV = """First Name,Last Name,Team,Division,GA,GAA,GP
Gus,Glove,Springfield Ice Cats,Monday Rec,40,2.0,20
Hal,Hands,Shelbyville Puck Pigs,Monday Rec,30,3.33,9
Ike,Ice,Shelbyville Puck Pigs,Monday Rec,0,0.0,1
Backup,Goalie,Springfield Ice Cats,Monday Rec,5,5.0,1
"""

REGISTRY_CSV = (
    "LEAGUE,DIVISION INFO,TEAM INFO,SCHEDULE,STANDINGS,GOALIE STATS,PLAYER STATS,"
    "PLAYOFF GOALIE STATS,PLAYOFF PLAYER STATS\n"
    "Test League,https://sheets.test/divisions.csv,https://sheets.test/teams.csv,"
    "https://sheets.test/schedule.csv,https://sheets.test/standings.csv,"
    "https://sheets.test/goalies.csv,https://sheets.test/players.csv,,\n"
    "Broken League,https://sheets.test/divisions.csv,,https://sheets.test/schedule.csv,"
    "https://sheets.test/standings.csv,https://sheets.test/goalies.csv,"
    "https://sheets.test/players.csv,,\n"
)

RESOURCES = {
    "/registry.csv": REGISTRY_CSV,
    "/divisions.csv": DIVISIONS_CSV,
    "/teams.csv": TEAMS_CSV,
    "/schedule.csv": SCHEDULE_CSV,
    "/standings.csv": STANDINGS_CSV,
    "/players.csv": PLAYERS_CSV,
    "/goalies.csv": GOALIES_CSV,
}


class SheetServer:
    """In-memory stand-in for the published sheets, counting every request."""

    def __init__(self, resources=None, failing=()):
        self.resources = dict(RESOURCES if resources is None else resources)
        self.failing = set(failing)
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path in self.failing:
            return httpx.Response(500, text="Internal Server Error")
        if path not in self.resources:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, text=self.resources[path])

    def count(self, path: str) -> int:
        return self.requests.count(path)

    def fetcher(self) -> ResourceFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return ResourceFetcher(client=client)


@pytest.fixture
def sheet_server():
    return SheetServer()


@pytest.fixture
def division_rows():
    return parse_delimited(DIVISIONS_CSV)


@pytest.fixture
def divisions(division_rows):
    from leaguedata.normalization.builders import build_divisions

    return build_divisions(division_rows)


@pytest.fixture
def schedule(divisions):
    from leaguedata.normalization.builders import build_schedule

    return build_schedule(parse_delimited(SCHEDULE_CSV), divisions)


@pytest.fixture
def conferences(division_rows):
    from leaguedata.normalization.builders import build_conferences

    return build_conferences(division_rows)
