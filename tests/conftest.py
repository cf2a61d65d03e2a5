from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.parcel_intake.parcel_intake.common.datetime_utils import day_bounds
from src.parcel_intake.parcel_intake.container import AppSettings, build_services
from src.parcel_intake.parcel_intake.logs.model import LogRecord, RegistrationResult
from src.parcel_intake.parcel_intake.users.model import User


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self._by_id = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)


class InMemoryLogs:
    """Mimics the MySQL backend: code lookup, per-client daily counters, soft voids."""

    def __init__(self, codes: Optional[dict[str, str]] = None):
        self.codes = dict(codes or {})
        self.rows: list[LogRecord] = []
        self._counters: dict[tuple[str, object], int] = {}
        self.register_calls: list[str] = []
        self.fail_reads = False

    def add(self, *, created_at: datetime, code: str, client_name: str, assigned_number: int = 1,
            user_id: Optional[int] = 1, is_void: bool = False) -> LogRecord:
        rec = LogRecord(
            log_id=len(self.rows) + 1,
            created_at=created_at,
            code=code,
            client_name=client_name,
            assigned_number=assigned_number,
            user_id=user_id,
            is_void=is_void,
        )
        self.rows.append(rec)
        return rec

    def register_package(self, code: str, *, user_id, now: datetime) -> Optional[RegistrationResult]:
        self.register_calls.append(code)
        client = self.codes.get(code)
        if client is None:
            return RegistrationResult(ok=False, message="Código no registrado. Verifique.", code=code)

        key = (client, now.date())
        self._counters[key] = self._counters.get(key, 0) + 1
        self.add(created_at=now, code=code, client_name=client, assigned_number=self._counters[key], user_id=user_id)

        start, end = day_bounds(now.date())
        total = sum(1 for r in self._in_range(start, end) if r.client_name == client and not r.is_void)
        return RegistrationResult(
            ok=True,
            message=f"Paquete registrado para {client}.",
            code=code,
            client_name=client,
            assigned_number=self._counters[key],
            total=total,
        )

    def void_log(self, log_id: int, *, user_id, now: datetime) -> bool:
        for i, r in enumerate(self.rows):
            if r.log_id == log_id:
                if not r.is_void:
                    self.rows[i] = LogRecord(
                        log_id=r.log_id,
                        created_at=r.created_at,
                        code=r.code,
                        client_name=r.client_name,
                        assigned_number=r.assigned_number,
                        user_id=r.user_id,
                        is_void=True,
                    )
                return True
        return False

    def _in_range(self, start: datetime, end: datetime) -> list[LogRecord]:
        if self.fail_reads:
            raise RuntimeError("database unavailable")
        rows = [r for r in self.rows if start <= r.created_at < end]
        rows.sort(key=lambda r: (r.created_at, r.log_id), reverse=True)
        return rows

    def list_for_range(self, start, end, *, include_void: bool = True):
        return [r for r in self._in_range(start, end) if include_void or not r.is_void]

    def count_for_range(self, start, end, *, include_void: bool = False) -> int:
        return len(self.list_for_range(start, end, include_void=include_void))

    def latest_for_range(self, start, end):
        rows = self._in_range(start, end)
        return rows[0] if rows else None

    def list_codes_for_range(self, start, end):
        return [r.code for r in self._in_range(start, end) if not r.is_void]


DEMO_EMAIL = "ops@example.com"
DEMO_PASSWORD = "secret123"


@pytest.fixture
def logs_repo() -> InMemoryLogs:
    return InMemoryLogs({"1001": "ACME", "1002": "ACME", "2001": "Globex"})


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            User(user_id=1, email=DEMO_EMAIL, full_name="Ops", password_hash=generate_password_hash(DEMO_PASSWORD)),
            User(
                user_id=2,
                email="gone@example.com",
                full_name="Gone",
                password_hash=generate_password_hash(DEMO_PASSWORD),
                is_active=False,
            ),
        ]
    )


@pytest.fixture
def app(monkeypatch, logs_repo, users_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.parcel_intake.parcel_intake.main import create_app

    container = build_services(users_repo=users_repo, logs_repo=logs_repo, settings=AppSettings(session_days=1))
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in_client(client):
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["email"] = DEMO_EMAIL
        sess["name"] = "Ops"
    return client
