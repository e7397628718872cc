"""
Calendar Periods

Pure date arithmetic for the four filter granularities: start and end of a
day, week (Monday to Sunday), month and year; moving by whole periods; and
the label shown for the current period.

PeriodCursor holds the only session state involved (reference date and
selected period). It belongs to the caller, never to a store.
"""

import calendar
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from moneybook.config import get_settings


class PeriodKind(str, Enum):
    """Calendar granularity used for filtering and reporting."""
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


def start_of(kind: PeriodKind, day: date) -> date:
    """First day of the period containing day."""
    if kind == PeriodKind.DAY:
        return day
    if kind == PeriodKind.WEEK:
        return day - timedelta(days=day.weekday())
    if kind == PeriodKind.MONTH:
        return day.replace(day=1)
    if kind == PeriodKind.YEAR:
        return day.replace(month=1, day=1)
    raise ValueError(f"Unknown period: {kind}")


def end_of(kind: PeriodKind, day: date) -> date:
    """Last day (inclusive) of the period containing day."""
    if kind == PeriodKind.DAY:
        return day
    if kind == PeriodKind.WEEK:
        return start_of(kind, day) + timedelta(days=6)
    if kind == PeriodKind.MONTH:
        return day.replace(day=calendar.monthrange(day.year, day.month)[1])
    if kind == PeriodKind.YEAR:
        return day.replace(month=12, day=31)
    raise ValueError(f"Unknown period: {kind}")


def period_range(kind: PeriodKind, day: date) -> tuple[date, date]:
    return start_of(kind, day), end_of(kind, day)


def advance(kind: PeriodKind, day: date, count: int) -> date:
    """
    Shift day by count whole periods (negative moves back).

    Month and year steps clamp to the end of shorter months,
    e.g. 31 Jan + 1 month = 28/29 Feb.
    """
    if kind == PeriodKind.DAY:
        return day + timedelta(days=count)
    if kind == PeriodKind.WEEK:
        return day + timedelta(weeks=count)
    if kind == PeriodKind.MONTH:
        return day + relativedelta(months=count)
    if kind == PeriodKind.YEAR:
        return day + relativedelta(years=count)
    raise ValueError(f"Unknown period: {kind}")


def display_text(kind: PeriodKind, day: date, date_pattern: Optional[str] = None) -> str:
    """
    Label for the period containing day.

    DAY: "25.07.2024"; WEEK: "22.07.2024 - 28.07.2024";
    MONTH: "July 2024"; YEAR: "2024".
    """
    pattern = date_pattern or get_settings().app.date_pattern
    if kind == PeriodKind.DAY:
        return day.strftime(pattern)
    if kind == PeriodKind.WEEK:
        start, end = period_range(kind, day)
        return f"{start.strftime(pattern)} - {end.strftime(pattern)}"
    if kind == PeriodKind.MONTH:
        return f"{calendar.month_name[day.month]} {day.year}"
    if kind == PeriodKind.YEAR:
        return str(day.year)
    raise ValueError(f"Unknown period: {kind}")


def contains(kind: PeriodKind, reference: date, day: date) -> bool:
    """True if day falls in the period of kind around reference."""
    start, end = period_range(kind, reference)
    return start <= day <= end


class PeriodCursor:
    """
    The period a view is looking at: a reference date plus a selected kind.

    With no kind selected, range() falls back to a single day.
    """

    def __init__(self, kind: Optional[PeriodKind] = None, reference: Optional[date] = None):
        self.kind = kind
        self.reference = reference or date.today()

    def select(self, kind: Optional[PeriodKind]) -> None:
        self.kind = kind

    def jump_to(self, day: date) -> None:
        self.reference = day

    def reset(self) -> None:
        """Move back to today, keeping the selected kind."""
        self.reference = date.today()

    def change_period(self, count: int) -> date:
        """Move count periods forward (or back). No-op without a kind."""
        if self.kind is not None:
            self.reference = advance(self.kind, self.reference, count)
        return self.reference

    def range(self) -> tuple[date, date]:
        return period_range(self.kind or PeriodKind.DAY, self.reference)

    def display_text(self) -> str:
        if self.kind is None:
            return ""
        return display_text(self.kind, self.reference)

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind else None
        return f"PeriodCursor(kind={kind}, reference={self.reference.isoformat()})"
