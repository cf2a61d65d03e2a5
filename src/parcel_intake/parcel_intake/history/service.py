from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import day_bounds, format_time, now_local
from ..core.exceptions import ValidationError
from ..logs.model import LogRecord
from ..logs.repository import LogRepository
from .model import ClientTotal, HistoryDayView

logger = logging.getLogger(__name__)

EXPORT_FIELDS = ["time", "code", "client_name", "assigned_number", "status"]


def totals_by_client(rows: Iterable[LogRecord]) -> list[ClientTotal]:
    """Count non-voided rows per client, highest first (ties keep first-seen order)."""
    counts: dict[str, int] = {}
    for row in rows:
        if row.is_void:
            continue
        counts[row.client_name] = counts.get(row.client_name, 0) + 1

    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [ClientTotal(client_name=name, total=total) for name, total in ordered]


class HistoryService:
    """Use case: review and void the logs of one day."""

    def __init__(self, logs: LogRepository):
        self._logs = logs

    def day_view(self, day: date) -> HistoryDayView:
        start, end = day_bounds(day)
        rows = list(self._logs.list_for_range(start, end, include_void=True))

        return HistoryDayView(
            day=day,
            logs=rows,
            total_day=sum(1 for r in rows if not r.is_void),
            totals_by_client=totals_by_client(rows),
            # Rows come newest first.
            last_log=rows[0] if rows else None,
        )

    def void(self, log_id: int, *, user_id: Optional[int], now: Optional[datetime] = None) -> None:
        now = now or now_local()
        if not self._logs.void_log(int(log_id), user_id=user_id, now=now):
            raise ValidationError(f"El registro {log_id} no existe")
        logger.info("User %s voided log %s", user_id, log_id)

    def export_rows(self, day: date) -> list[dict]:
        view = self.day_view(day)
        return [
            {
                "time": format_time(r.created_at),
                "code": r.code,
                "client_name": r.client_name,
                "assigned_number": r.assigned_number,
                "status": "Anulado" if r.is_void else "Activo",
            }
            for r in view.logs
        ]
