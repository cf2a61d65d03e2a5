from __future__ import annotations

from pathlib import Path

from src.parcel_intake.parcel_intake.database.bootstrap import (
    _iter_sql_statements,
    _strip_create_db_and_use,
    _strip_line_comments,
)

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO codes VALUES ('a;b', 'x'); SELECT 1;"

    assert list(_iter_sql_statements(sql)) == ["INSERT INTO codes VALUES ('a;b', 'x')", "SELECT 1"]


def test_splitter_returns_trailing_statement_without_semicolon():
    assert list(_iter_sql_statements("SELECT 1; SELECT 2")) == ["SELECT 1", "SELECT 2"]


def test_schema_file_is_database_name_agnostic():
    sql = _strip_line_comments(_strip_create_db_and_use((REPO_ROOT / "database" / "schema.sql").read_text("utf-8")))
    statements = list(_iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
    assert {s.split()[5] for s in statements} == {"users", "codes", "client_daily_counters", "logs"}
