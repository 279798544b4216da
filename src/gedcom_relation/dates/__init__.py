from __future__ import annotations

from .model import (
    AfterDate,
    ApproximateDate,
    BeforeDate,
    BetweenDate,
    Date,
    ExactDate,
    PeriodDate,
    UnparsedDate,
)
from .normalizer import display_date, format_date, parse_date

__all__ = [
    "AfterDate",
    "ApproximateDate",
    "BeforeDate",
    "BetweenDate",
    "Date",
    "ExactDate",
    "PeriodDate",
    "UnparsedDate",
    "display_date",
    "format_date",
    "parse_date",
]
