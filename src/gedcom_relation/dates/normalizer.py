# src/gedcom_relation/dates/normalizer.py

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .model import (
    AfterDate,
    ApproximateDate,
    BeforeDate,
    BetweenDate,
    Date,
    ExactDate,
    PeriodDate,
    UnparsedDate,
    anchor,
)


# ---------------------------------------------------------------------------
# Month and calendar tables
# ---------------------------------------------------------------------------

MONTH_ABBREVIATIONS: Tuple[str, ...] = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

MONTHS: Mapping[str, int] = MappingProxyType(
    {
        **{abbr: n for n, abbr in enumerate(MONTH_ABBREVIATIONS, start=1)},
        "JANUARY": 1,
        "FEBRUARY": 2,
        "MARCH": 3,
        "APRIL": 4,
        "JUNE": 6,
        "JULY": 7,
        "AUGUST": 8,
        "SEPT": 9,
        "SEPTEMBER": 9,
        "OCTOBER": 10,
        "NOVEMBER": 11,
        "DECEMBER": 12,
    }
)

# Calendar escapes whose months and years read like the Gregorian ones.
CALENDAR_ESCAPES = frozenset({"@#DGREGORIAN@", "@#DJULIAN@"})

NUMERIC_DATE = re.compile(r"^(\d{1,4})([/.\-])(\d{1,2})(?:\2(\d{1,4}))?$")


# ---------------------------------------------------------------------------
# Qualifier tables
# ---------------------------------------------------------------------------

def _aliases(*groups: Tuple[Iterable[str], str]) -> Mapping[str, str]:
    table = {}
    for aliases, code in groups:
        for alias in aliases:
            table[alias.lower()] = code
    return MappingProxyType(table)


# alias (lowercase) -> standard code
QUALIFIER_ALIASES: Mapping[str, str] = _aliases(
    (("abt", "abt.", "about", "approx", "approx.", "approximately",
      "circa", "c", "c.", "ca", "ca.", "around"), "ABT"),
    (("cal", "cal.", "calculated", "computed"), "CAL"),
    (("est", "est.", "estimated", "estimate", "roughly", "probable"), "EST"),
    (("bef", "bef.", "before", "pre"), "BEF"),
    (("aft", "aft.", "after", "post"), "AFT"),
    (("bet", "bet.", "between", "betw", "betw.", "btw", "btw."), "BET"),
    (("from", "since"), "FROM"),
    (("to", "until", "till", "thru", "through"), "TO"),
)

APPROXIMATE_CODES = frozenset({"ABT", "CAL", "EST"})
RANGE_SEPARATORS = frozenset({"and", "&"})


# ---------------------------------------------------------------------------
# Bare date parsing
# ---------------------------------------------------------------------------

def _parse_year(token: str) -> Optional[int]:
    if token.isdigit() and 1 <= len(token) <= 4:
        year = int(token)
        if year >= 1:
            return year
    return None


def _parse_month(token: str) -> Optional[int]:
    named = MONTHS.get(token.upper().rstrip("."))
    if named is not None:
        return named
    if token.isdigit() and len(token) <= 2:
        month = int(token)
        if 1 <= month <= 12:
            return month
    return None


def _parse_day(token: str) -> Optional[int]:
    if token.isdigit() and len(token) <= 2:
        day = int(token)
        if 1 <= day <= 31:
            return day
    return None


def _split_numeric(tokens: List[str]) -> List[str]:
    """'12/03/1900' -> ['12', '03', '1900']; anything else is returned unchanged."""
    if len(tokens) != 1:
        return tokens
    match = NUMERIC_DATE.match(tokens[0])
    if match is None:
        return tokens
    first, _, second, third = match.groups()
    return [first, second, third] if third else [first, second]


def _parse_simple(tokens: Sequence[str]) -> Optional[ExactDate]:
    """
    Parse a date with no leading qualifier.

    Supports:
        - '1900'
        - 'JAN 1900', '01 1900'
        - '1 JAN 1900', '1 01 1900', '1/1/1900', '1900-01-01'
    """
    parts: List[str] = []
    for token in tokens:
        if token.upper() in CALENDAR_ESCAPES:
            continue
        if token.startswith("@#"):
            # Hebrew, French Republican and unknown calendars are not modeled.
            return None
        parts.append(token)

    parts = _split_numeric(parts)

    if len(parts) == 1:
        year = _parse_year(parts[0])
        return ExactDate(year) if year is not None else None

    if len(parts) == 2:
        month, year = _parse_month(parts[0]), _parse_year(parts[1])
        if month is None or year is None:
            return None
        return ExactDate(year, month)

    if len(parts) == 3:
        if len(parts[0]) == 4 and parts[0].isdigit():
            year, month, day = _parse_year(parts[0]), _parse_month(parts[1]), _parse_day(parts[2])
        else:
            day, month, year = _parse_day(parts[0]), _parse_month(parts[1]), _parse_year(parts[2])
        if day is None or month is None or year is None:
            return None
        return ExactDate(year, month, day)

    return None


# ---------------------------------------------------------------------------
# Qualified dates
# ---------------------------------------------------------------------------

def _split_on(tokens: Sequence[str], separators: Iterable[str]) -> Optional[Tuple[List[str], List[str]]]:
    """
    Split tokens into (left, right) at the first occurrence of any separator
    token (case-insensitive). Returns None if no separator found.
    """
    lowers = {s.lower() for s in separators}
    for i, t in enumerate(tokens):
        if t.lower() in lowers:
            return list(tokens[:i]), list(tokens[i + 1 :])
    return None


def _ordered(lower: Date, upper: Date) -> Tuple[Date, Date]:
    low, high = anchor(lower), anchor(upper)
    if low is not None and high is not None and low.sort_key() > high.sort_key():
        return upper, lower
    return lower, upper


def _parse_tokens(tokens: Sequence[str]) -> Optional[Date]:
    if not tokens:
        return None

    code = QUALIFIER_ALIASES.get(tokens[0].lower())
    rest = tokens[1:]

    if code is None:
        return _parse_simple(tokens)

    if code == "BET":
        split = _split_on(rest, RANGE_SEPARATORS)
        if split is None:
            return None
        lower, upper = _parse_tokens(split[0]), _parse_tokens(split[1])
        if lower is None or upper is None:
            return None
        lower, upper = _ordered(lower, upper)
        return BetweenDate(lower, upper)

    if code == "FROM":
        to_aliases = [a for a, c in QUALIFIER_ALIASES.items() if c == "TO"]
        split = _split_on(rest, to_aliases)
        if split is None:
            start = _parse_tokens(rest)
            return PeriodDate(start=start) if start is not None else None
        start, end = _parse_tokens(split[0]), _parse_tokens(split[1])
        if start is None or end is None:
            return None
        start, end = _ordered(start, end)
        return PeriodDate(start=start, end=end)

    inner = _parse_tokens(rest)
    if inner is None:
        return None

    if code == "TO":
        return PeriodDate(end=inner)
    if code in APPROXIMATE_CODES:
        return ApproximateDate(inner, qualifier=code)
    if code == "BEF":
        return BeforeDate(inner)
    return AfterDate(inner)


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def parse_date(raw: Optional[str]) -> Date:
    """
    Parse a GEDCOM DATE value into a Date variant.

    Qualifiers are tried first (ABT/CAL/EST, BEF, AFT, BET .. AND ..,
    FROM .. TO .., TO ..), each wrapping recursively parsed sub-dates;
    otherwise the value is read as a bare day/month/year date:

        - '1 JAN 1900'   -> ExactDate(1900, 1, 1)
        - 'JAN 1900'     -> ExactDate(1900, 1)
        - '1900'         -> ExactDate(1900)
        - 'ABT 1900'     -> ApproximateDate(ExactDate(1900), 'ABT')

    Never raises: text that matches no recognized form, including an
    out-of-range numeric month or day, yields ``UnparsedDate(raw)``.
    """
    text = "" if raw is None else str(raw)
    tokens = text.replace(",", " ").split()
    parsed = _parse_tokens(tokens)
    return parsed if parsed is not None else UnparsedDate(text)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_DISPLAY_WORDS = MappingProxyType(
    {
        "ABT": "Abt",
        "CAL": "Cal",
        "EST": "Est",
        "BEF": "Bef",
        "AFT": "Aft",
        "BET": "Bet",
        "AND": "and",
        "FROM": "From",
        "TO": "to",
    }
)


def _word(code: str, display: bool, leading: bool = True) -> str:
    if not display:
        return code
    word = _DISPLAY_WORDS[code]
    return word[0].upper() + word[1:] if leading else word


def _render(date: Date, display: bool) -> str:
    if isinstance(date, UnparsedDate):
        return date.text

    if isinstance(date, ExactDate):
        parts = []
        if date.day is not None:
            parts.append(str(date.day))
        if date.month is not None:
            month = MONTH_ABBREVIATIONS[date.month - 1]
            parts.append(month.title() if display else month)
        parts.append(str(date.year))
        return " ".join(parts)

    if isinstance(date, ApproximateDate):
        return f"{_word(date.qualifier, display)} {_render(date.date, display)}"
    if isinstance(date, BeforeDate):
        return f"{_word('BEF', display)} {_render(date.date, display)}"
    if isinstance(date, AfterDate):
        return f"{_word('AFT', display)} {_render(date.date, display)}"
    if isinstance(date, BetweenDate):
        return (
            f"{_word('BET', display)} {_render(date.lower, display)} "
            f"{_word('AND', display, leading=False)} {_render(date.upper, display)}"
        )

    if date.start is None and date.end is None:
        return ""
    if date.start is None:
        return f"{_word('TO', display)} {_render(date.end, display)}"
    text = f"{_word('FROM', display)} {_render(date.start, display)}"
    if date.end is not None:
        text += f" {_word('TO', display, leading=False)} {_render(date.end, display)}"
    return text


def format_date(date: Date) -> str:
    """Render the canonical GEDCOM form, e.g. 'BET 1 JAN 1900 AND 1910'."""
    return _render(date, display=False)


def display_date(date: Date) -> str:
    """Render the schema display form, e.g. '1 Jan 1990' or 'Abt 1900'."""
    return _render(date, display=True)
