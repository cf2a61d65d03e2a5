from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable

from ..common.datetime_utils import day_bounds
from ..logs.repository import LogRepository
from .model import CodeTotal, DailySummary


def totals_by_code(codes: Iterable[str]) -> list[CodeTotal]:
    counts = Counter(codes)
    ordered = sorted(counts.items(), key=lambda item: (item[0].casefold(), item[0]))
    return [CodeTotal(code=code, total=total) for code, total in ordered]


class SummaryService:
    """Use case: package count per code for one day (voided logs excluded)."""

    def __init__(self, logs: LogRepository):
        self._logs = logs

    def daily_summary(self, day: date) -> DailySummary:
        start, end = day_bounds(day)
        codes = self._logs.list_codes_for_range(start, end)
        return DailySummary(day=day, rows=totals_by_code(codes))
