from conftest import STANDINGS_CSV, TEAMS_CSV

from leaguedata.normalization.builders import build_standings, build_teams
from leaguedata.normalization.joins import (
    find_conference,
    find_division_by_abbreviation,
    find_team,
    resolve_division,
    standings_team,
)
from leaguedata.normalization.tabular import parse_delimited


def test_resolve_division_exact_label(divisions):
    ref = resolve_division("Monday Competitive", divisions)
    assert ref.abbreviation == "MC"
    assert ref.label == "Monday Competitive"


def test_resolve_division_is_exact_match_only(divisions):
    assert not resolve_division("monday rec", divisions).is_resolved
    assert not resolve_division("", divisions).is_resolved
    assert not resolve_division("Monday Rec", []).is_resolved


def test_find_division_helpers(divisions):
    assert find_division_by_abbreviation(" mc ", divisions).label == "Monday Competitive"
    assert find_division_by_abbreviation("", divisions) is None


def test_find_conference(conferences):
    assert find_conference("Tuesday", conferences).location == "Rink B"
    assert find_conference("Sunday", conferences) is None


def test_standings_row_resolves_team_details():
    teams = build_teams(parse_delimited(TEAMS_CSV))
    row = build_standings(parse_delimited(STANDINGS_CSV))[1]
    team = standings_team(row, teams)
    assert team.city == "Springfield"
    assert team.name == "Ice Cats"
    assert find_team(None, teams) is None
