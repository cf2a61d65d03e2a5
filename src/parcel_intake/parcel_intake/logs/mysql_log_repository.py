from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import day_bounds
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, fetchscalar
from .model import LogRecord, RegistrationResult
from .repository import LogRepository

logger = logging.getLogger(__name__)

UNKNOWN_CODE_MESSAGE = "Código no registrado. Verifique."

_COLUMNS = "id, created_at, code, client_name, assigned_number, user_id, is_void"


def _to_record(r: Dict[str, Any]) -> LogRecord:
    return LogRecord(
        log_id=int(r["id"]),
        created_at=r["created_at"],
        code=str(r["code"]),
        client_name=r["client_name"],
        assigned_number=int(r["assigned_number"]),
        user_id=int(r["user_id"]) if r.get("user_id") is not None else None,
        is_void=bool(r.get("is_void")),
    )


class MySQLLogRepository(LogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def register_package(self, code: str, *, user_id: Optional[int], now: datetime) -> Optional[RegistrationResult]:
        start, end = day_bounds(now.date())

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT code, client_name, is_active FROM codes WHERE code=%s", (code,))
            code_row = fetchone(cur)
            if not code_row or not code_row.get("is_active"):
                return RegistrationResult(ok=False, message=UNKNOWN_CODE_MESSAGE, code=code)

            client_name = code_row["client_name"]

            # The counter row lock serializes concurrent registrations for one client.
            cur.execute(
                """
                INSERT INTO client_daily_counters(client_name, work_date, last_number)
                VALUES(%s, %s, LAST_INSERT_ID(1))
                ON DUPLICATE KEY UPDATE last_number = LAST_INSERT_ID(last_number + 1)
                """,
                (client_name, now.date()),
            )
            cur.execute("SELECT LAST_INSERT_ID() AS n")
            assigned_number = int(fetchscalar(cur, "n", 0))

            cur.execute(
                """
                INSERT INTO logs(created_at, code, client_name, assigned_number, user_id, is_void)
                VALUES(%s,%s,%s,%s,%s,0)
                """,
                (now, code, client_name, assigned_number, user_id),
            )

            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM logs
                WHERE client_name=%s AND is_void=0 AND created_at >= %s AND created_at < %s
                """,
                (client_name, start, end),
            )
            total = int(fetchscalar(cur, "total", 0))

        logger.info("Registered code %s for %s as #%d (total %d)", code, client_name, assigned_number, total)
        return RegistrationResult(
            ok=True,
            message=f"Paquete registrado para {client_name}.",
            code=code,
            client_name=client_name,
            assigned_number=assigned_number,
            total=total,
        )

    def void_log(self, log_id: int, *, user_id: Optional[int], now: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, is_void FROM logs WHERE id=%s FOR UPDATE", (int(log_id),))
            row = fetchone(cur)
            if not row:
                return False
            if row.get("is_void"):
                return True

            cur.execute(
                "UPDATE logs SET is_void=1, voided_at=%s, voided_by=%s WHERE id=%s",
                (now, user_id, int(log_id)),
            )
        logger.info("Log %s voided by user %s", log_id, user_id)
        return True

    def list_for_range(self, start: datetime, end: datetime, *, include_void: bool = True) -> Sequence[LogRecord]:
        void_clause = "" if include_void else " AND is_void=0"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM logs
                WHERE created_at >= %s AND created_at < %s{void_clause}
                ORDER BY created_at DESC, id DESC
                """,
                (start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_range(self, start: datetime, end: datetime, *, include_void: bool = False) -> int:
        void_clause = "" if include_void else " AND is_void=0"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS total FROM logs WHERE created_at >= %s AND created_at < %s{void_clause}",
                (start, end),
            )
            return int(fetchscalar(cur, "total", 0))

    def latest_for_range(self, start: datetime, end: datetime) -> Optional[LogRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM logs
                WHERE created_at >= %s AND created_at < %s
                ORDER BY created_at DESC, id DESC
                LIMIT 1
                """,
                (start, end),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_codes_for_range(self, start: datetime, end: datetime) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT code FROM logs WHERE is_void=0 AND created_at >= %s AND created_at < %s",
                (start, end),
            )
            return [str(r["code"]) for r in fetchall(cur)]
