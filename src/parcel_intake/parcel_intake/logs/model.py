from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LogRecord:
    """Domain entity: one package registration event."""

    log_id: int
    created_at: datetime
    code: str
    client_name: str
    assigned_number: int
    user_id: Optional[int]
    is_void: bool = False


@dataclass(frozen=True)
class RegistrationResult:
    """Row answered by the register_package procedure."""

    ok: bool
    message: Optional[str]
    code: Optional[str] = None
    client_name: Optional[str] = None
    assigned_number: Optional[int] = None
    total: Optional[int] = None

    def as_dict(self) -> dict:
        return {
            "ok": self.ok,
            "message": self.message,
            "code": self.code,
            "client_name": self.client_name,
            "assigned_number": self.assigned_number,
            "total": self.total,
        }


@dataclass(frozen=True)
class DashboardView:
    """Mini dashboard shown above the registration form."""

    total_today: int
    last_client: str
    last_time: str

    def as_dict(self) -> dict:
        return {
            "total_today": self.total_today,
            "last_client": self.last_client,
            "last_time": self.last_time,
        }
