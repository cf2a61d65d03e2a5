from __future__ import annotations

from datetime import date, datetime

import pytest

from src.parcel_intake.parcel_intake.common.datetime_utils import (
    day_bounds,
    format_time,
    parse_iso_date,
    to_date_input_value,
)


def test_day_bounds_is_half_open_local_day():
    start, end = day_bounds(date(2026, 2, 28))

    assert start == datetime(2026, 2, 28, 0, 0)
    assert end == datetime(2026, 3, 1, 0, 0)


def test_day_bounds_across_year_end():
    start, end = day_bounds(date(2025, 12, 31))

    assert end == datetime(2026, 1, 1)
    assert start == datetime(2025, 12, 31)


def test_parse_and_format_date_input():
    assert parse_iso_date("2026-03-02") == date(2026, 3, 2)
    assert to_date_input_value(date(2026, 3, 2)) == "2026-03-02"


def test_parse_iso_date_rejects_garbage():
    with pytest.raises(ValueError):
        parse_iso_date("02/03/2026")


def test_format_time():
    assert format_time(datetime(2026, 3, 2, 7, 5, 9)) == "07:05:09"
    assert format_time(None) == "—"
