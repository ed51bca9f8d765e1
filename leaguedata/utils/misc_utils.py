# leaguedata/utils/misc_utils.py
import math
import re
from typing import Optional

DIV_ZERO_MARKER = "#DIV/0!"

_PRONOUN_SUFFIX_PARENS = re.compile(
    r"\s*\((?:they|she|he)\s*/\s*(?:them|her|him)\)\s*$", re.IGNORECASE
)
_PRONOUN_SUFFIX_BARE = re.compile(
    r"\s+(?:they|she|he)\s*/\s*(?:them|her|him)\s*$", re.IGNORECASE
)


def league_key(league_name: str) -> str:
    """Case- and whitespace-insensitive key for a league name."""
    return " ".join(str(league_name or "").split()).lower()


def to_float(value: Optional[str], default: Optional[float] = 0.0) -> Optional[float]:
    """Lenient numeric parse of a sheet cell.

    Blank or unparseable cells (the spreadsheet's #DIV/0! marker included)
    and NaN/inf return ``default``.
    """
    text = str(value if value is not None else "").strip()
    if not text:
        return default
    try:
        number = float(text.replace(",", ""))
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    return number


def to_percentage(value: Optional[str]) -> float:
    """Win percentage cell; a team with no games shows #DIV/0!, which reads as 0."""
    if str(value or "").strip() == DIV_ZERO_MARKER:
        return 0.0
    return to_float(value)


def to_int(value: Optional[str], default: Optional[int] = 0) -> Optional[int]:
    """Like to_float, truncated to an int."""
    number = to_float(value, None)
    return default if number is None else int(number)


def to_optional_int(value: Optional[str]) -> Optional[int]:
    """Parses an int, returning None for blank or unparseable cells."""
    return to_int(value, None)


def parse_week(value: Optional[str]) -> Optional[int]:
    """Week number of a schedule row, or None when it is blank, unparseable,
    fractional or negative."""
    text = str(value if value is not None else "").strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or number < 0 or not number.is_integer():
        return None
    return int(number)


def normalize_color(value: Optional[str]) -> Optional[str]:
    """Hex colour without a leading '#', lower-cased; None when blank."""
    text = str(value or "").strip().lstrip("#").lower()
    return text or None


def normalize_name(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


def sanitize_last_name(last_name: Optional[str]) -> str:
    """Strips a trailing pronoun annotation, e.g. "Smith (they/them)" -> "Smith"."""
    text = _PRONOUN_SUFFIX_PARENS.sub("", str(last_name or ""))
    text = _PRONOUN_SUFFIX_BARE.sub("", text)
    return text.strip()


def truncate_label(value: Optional[str], limit: int = 20) -> str:
    """Upper-cases a display label and truncates it with '...' past ``limit``."""
    text = str(value or "").upper()
    return text[:limit] + "..." if len(text) > limit else text
