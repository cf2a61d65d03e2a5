from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class CodeTotal:
    code: str
    total: int


@dataclass(frozen=True)
class DailySummary:
    day: date
    rows: list[CodeTotal] = field(default_factory=list)

    @property
    def total_day(self) -> int:
        return sum(r.total for r in self.rows)
