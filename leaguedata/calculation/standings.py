from typing import Iterable, List, Optional, Sequence, Tuple

from leaguedata.calculation.chunking import ranked_chunks
from leaguedata.config.settings import settings
from leaguedata.models.team import StandingsRow

UNRANKED = 999


def division_standings(rows: Iterable[StandingsRow], division_label: str) -> List[StandingsRow]:
    return [row for row in rows if row.division == division_label]


def order_by_rank(rows: Iterable[StandingsRow]) -> List[StandingsRow]:
    """Stable sort by the sheet's RANK column; unranked rows go last."""
    return sorted(rows, key=lambda row: row.rank or UNRANKED)


def standings_pages(
    rows: Sequence[StandingsRow], max_per_chunk: Optional[int] = None
) -> List[Tuple[int, List[StandingsRow]]]:
    """Rank-ordered standings split into balanced pages with their first rank."""
    max_per_chunk = max_per_chunk or settings.standings_max_per_chunk
    return ranked_chunks(order_by_rank(rows), max_per_chunk)
