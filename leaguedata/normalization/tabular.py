"""Delimited-text parsing and row access for published league sheets.

The sheets are hand-edited, so parsing is deliberately lenient: it never
raises, quotes simply toggle whether the delimiter splits a cell, and an
unterminated quote swallows the rest of its line.
"""

from typing import Dict, List, Sequence, Tuple

Row = List[str]
Rows = List[Row]

QUOTE = '"'


def parse_delimited(text: str, delimiter: str = ",") -> Rows:
    """Parses delimited text into rows of trimmed string cells.

    Carriage returns are stripped before splitting on newlines, and blank or
    whitespace-only lines are skipped. Quote characters are dropped from the
    cell text; doubled quotes are not treated as an escaped quote.
    """
    rows: Rows = []
    for line in str(text or "").replace("\r", "").split("\n"):
        if not line.strip():
            continue

        cells: Row = []
        current: List[str] = []
        in_quotes = False
        for char in line:
            if char == QUOTE:
                in_quotes = not in_quotes
            elif char == delimiter and not in_quotes:
                cells.append("".join(current).strip())
                current = []
            else:
                current.append(char)

        cells.append("".join(current).strip())
        rows.append(cells)

    return rows


def serialize_row(row: Sequence[str], delimiter: str = ",") -> str:
    """Joins cells into one line, quoting any cell that contains the delimiter."""
    return delimiter.join(
        f"{QUOTE}{cell}{QUOTE}" if delimiter in cell else cell for cell in row
    )


class HeaderIndex:
    """Maps the column names of a header row to their positions.

    Lookups by name keep the entity builders working when upstream sheets
    reorder their columns. Missing columns read as an empty string.
    """

    def __init__(self, header_row: Sequence[str]):
        self.columns: Dict[str, int] = {}
        for index, name in enumerate(header_row):
            # Later duplicates win, matching a plain name -> index assignment
            self.columns[name] = index

    def __contains__(self, name: str) -> bool:
        return name in self.columns

    def __len__(self) -> int:
        return len(self.columns)

    def get(self, row: Sequence[str], name: str) -> str:
        index = self.columns.get(name)
        if index is None:
            return ""
        return cell_at(row, index)


def cell_at(row: Sequence[str], index: int) -> str:
    """Positional cell access, "" past the end of the row.

    Schema-fragile: only for resources whose columns are read by position
    (division and team info) and for the schedule's metadata cells.
    """
    if 0 <= index < len(row):
        return row[index]
    return ""


def header_index_at(rows: Rows, header_row: int = 0) -> HeaderIndex:
    """Builds the header index from row ``header_row`` (empty if absent)."""
    if header_row < len(rows):
        return HeaderIndex(rows[header_row])
    return HeaderIndex([])


# Schedule metadata lives in fixed cells above the schedule's header row.
SCHEDULE_WEEK_CELL: Tuple[int, int] = (1, 2)
SCHEDULE_YEAR_CELL: Tuple[int, int] = (1, 3)
SCHEDULE_HEADER_ROW = 2


def schedule_metadata_cells(rows: Rows) -> Tuple[str, str]:
    """Raw (week, year) cells of a schedule resource.

    Schema-fragile: the only place that knows where the schedule sheet keeps
    its current week and season year.
    """

    def _cell(position: Tuple[int, int]) -> str:
        row_index, column = position
        if row_index >= len(rows):
            return ""
        return cell_at(rows[row_index], column)

    return _cell(SCHEDULE_WEEK_CELL), _cell(SCHEDULE_YEAR_CELL)
