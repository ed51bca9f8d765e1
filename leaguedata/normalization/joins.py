from typing import Iterable, Optional

from leaguedata.models.division import Conference, Division, DivisionRef
from leaguedata.models.team import StandingsRow, Team


def resolve_division(label: str, divisions: Iterable[Division]) -> DivisionRef:
    """Resolves a "{conference} {division}" label to its canonical division.

    The first exact match wins. Unmatched labels (exhibitions, byes, typos)
    resolve to an empty DivisionRef instead of failing; consumers fall back
    to a placeholder such as "TBD".
    """
    for division in divisions:
        if label == division.label:
            return DivisionRef.of(division)
    return DivisionRef.empty()


def find_division_by_abbreviation(
    abbreviation: str, divisions: Iterable[Division]
) -> Optional[Division]:
    wanted = str(abbreviation or "").strip().upper()
    if not wanted:
        return None
    for division in divisions:
        if division.abbreviation.upper() == wanted:
            return division
    return None


def find_conference(name: str, conferences: Iterable[Conference]) -> Optional[Conference]:
    for conference in conferences:
        if conference.name == name:
            return conference
    return None


def find_team(full_name: Optional[str], teams: Iterable[Team]) -> Optional[Team]:
    """Looks a team up by its full name, the join key every sheet uses."""
    if not full_name:
        return None
    for team in teams:
        if team.full_name == full_name:
            return team
    return None


def standings_team(row: StandingsRow, teams: Iterable[Team]) -> Optional[Team]:
    """Resolves a standings row's city/nickname through the team collection."""
    return find_team(row.team_full_name, teams)
