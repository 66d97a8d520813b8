from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def month_start(day: date) -> datetime:
    return datetime(day.year, day.month, 1)


def next_month_start(day: date) -> datetime:
    if day.month == 12:
        return datetime(day.year + 1, 1, 1)
    return datetime(day.year, day.month + 1, 1)


def month_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` datetime range covering the calendar month of ``day``.

    Covers the first day 00:00 through the whole of the last day.
    """

    return month_start(day), next_month_start(day)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
