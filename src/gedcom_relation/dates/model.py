# src/gedcom_relation/dates/model.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class ExactDate:
    """A calendar date known to year, month or day precision."""
    year: int
    month: Optional[int] = None
    day: Optional[int] = None

    def __post_init__(self) -> None:
        if self.day is not None and self.month is None:
            raise ValueError("ExactDate with a day must also have a month")

    @property
    def precision(self) -> str:
        if self.day is not None:
            return "day"
        if self.month is not None:
            return "month"
        return "year"

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.year, self.month or 0, self.day or 0)


@dataclass(frozen=True)
class ApproximateDate:
    """ABT / CAL / EST wrapped around another date."""
    date: "Date"
    qualifier: str = "ABT"


@dataclass(frozen=True)
class BeforeDate:
    date: "Date"


@dataclass(frozen=True)
class AfterDate:
    date: "Date"


@dataclass(frozen=True)
class BetweenDate:
    """BET lower AND upper; lower <= upper once normalized."""
    lower: "Date"
    upper: "Date"


@dataclass(frozen=True)
class PeriodDate:
    """FROM start [TO end], or TO end alone."""
    start: Optional["Date"] = None
    end: Optional["Date"] = None


@dataclass(frozen=True)
class UnparsedDate:
    """Free text that matched no recognized date form, kept verbatim."""
    text: str


Date = Union[
    ExactDate,
    ApproximateDate,
    BeforeDate,
    AfterDate,
    BetweenDate,
    PeriodDate,
    UnparsedDate,
]


def anchor(date: Optional[Date]) -> Optional[ExactDate]:
    """
    Return the exact date a value is anchored on, used for ordering bounds.

    Qualified dates are anchored on their inner date, ranges on their lower
    (or only) bound; unparsed text has no anchor.
    """
    if date is None or isinstance(date, UnparsedDate):
        return None
    if isinstance(date, ExactDate):
        return date
    if isinstance(date, (ApproximateDate, BeforeDate, AfterDate)):
        return anchor(date.date)
    if isinstance(date, BetweenDate):
        return anchor(date.lower)
    return anchor(date.start) or anchor(date.end)
