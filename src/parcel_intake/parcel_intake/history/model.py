from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..logs.model import LogRecord


@dataclass(frozen=True)
class ClientTotal:
    client_name: str
    total: int


@dataclass(frozen=True)
class HistoryDayView:
    """Everything the history page shows for one day."""

    day: date
    logs: list[LogRecord] = field(default_factory=list)
    total_day: int = 0
    totals_by_client: list[ClientTotal] = field(default_factory=list)
    last_log: Optional[LogRecord] = None
