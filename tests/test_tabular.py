from leaguedata.normalization.tabular import (
    HeaderIndex,
    cell_at,
    parse_delimited,
    schedule_metadata_cells,
    serialize_row,
)


def test_parse_skips_blank_lines_and_strips_carriage_returns():
    rows = parse_delimited("a,b\r\n\r\n   \nc, d \r\n")
    assert rows == [["a", "b"], ["c", "d"]]


def test_quoted_delimiter_does_not_split():
    rows = parse_delimited('Name,Note\nSmith,"Goals, assists"\n')
    assert rows[1] == ["Smith", "Goals, assists"]


def test_unterminated_quote_swallows_rest_of_line():
    rows = parse_delimited('a,"b,c,d\ne,f')
    assert rows == [["a", "b,c,d"], ["e", "f"]]


def test_doubled_quotes_are_dropped_not_escaped():
    rows = parse_delimited('x,"say ""hi"""')
    assert rows == [["x", "say hi"]]


def test_parse_never_raises_on_odd_input():
    assert parse_delimited("") == []
    assert parse_delimited(None) == []
    assert parse_delimited(",,,") == [["", "", "", ""]]


def test_serialized_rows_parse_back_to_the_same_cells():
    row = ["Monday Rec", "Smith, Jr.", "3"]
    assert parse_delimited(serialize_row(row)) == [row]


def test_alternate_delimiter():
    assert parse_delimited("a\tb,c", delimiter="\t") == [["a", "b,c"]]


def test_header_index_reads_by_name_and_tolerates_missing_columns():
    header = HeaderIndex(["GP", "W", "PTS"])
    assert header.get(["3", "2", "5"], "PTS") == "5"
    assert header.get(["3", "2", "5"], "RANK") == ""
    assert header.get(["3"], "PTS") == ""
    assert "W" in header and len(header) == 3


def test_cell_at_past_end_of_row():
    assert cell_at(["a"], 0) == "a"
    assert cell_at(["a"], 5) == ""
    assert cell_at(["a"], -1) == ""


def test_schedule_metadata_cells():
    rows = parse_delimited("Schedule\n,,7,2025\nWeek,Date\n")
    assert schedule_metadata_cells(rows) == ("7", "2025")
    assert schedule_metadata_cells([]) == ("", "")
