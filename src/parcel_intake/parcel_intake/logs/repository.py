from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import LogRecord, RegistrationResult


class LogRepository(Protocol):
    """Backend client for package logs.

    `register_package` and `void_log` are the two write procedures; the rest
    are read queries over a [start, end) creation-time range.
    """

    def register_package(self, code: str, *, user_id: Optional[int], now: datetime) -> Optional[RegistrationResult]:
        """Validate the code, allocate the next per-client number for the day and persist a log.

        Must be atomic. Unknown codes answer ok=False with a readable message.
        """

        raise NotImplementedError

    def void_log(self, log_id: int, *, user_id: Optional[int], now: datetime) -> bool:
        """Mark a log as voided. Idempotent; returns False only when the log does not exist."""

        raise NotImplementedError

    def list_for_range(self, start: datetime, end: datetime, *, include_void: bool = True) -> Sequence[LogRecord]:
        """Logs created in [start, end), newest first."""

        raise NotImplementedError

    def count_for_range(self, start: datetime, end: datetime, *, include_void: bool = False) -> int:
        raise NotImplementedError

    def latest_for_range(self, start: datetime, end: datetime) -> Optional[LogRecord]:
        raise NotImplementedError

    def list_codes_for_range(self, start: datetime, end: datetime) -> Sequence[str]:
        """Codes of the non-voided logs created in [start, end)."""

        raise NotImplementedError
