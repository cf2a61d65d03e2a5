from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import DATE_INPUT_FORMAT, EMPTY_PLACEHOLDER, TIME_DISPLAY_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_INPUT_FORMAT).date()


def to_date_input_value(d: date) -> str:
    return d.strftime(DATE_INPUT_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_bounds(d: date) -> tuple[datetime, datetime]:
    """Half-open range [00:00 of d, 00:00 of the next day)."""
    start = datetime(d.year, d.month, d.day)
    return start, start + timedelta(days=1)


def format_time(value: Optional[datetime]) -> str:
    if value is None:
        return EMPTY_PLACEHOLDER
    return value.strftime(TIME_DISPLAY_FORMAT)
