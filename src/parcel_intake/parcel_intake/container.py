from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .core.constants import DEFAULT_DOUBLE_SUBMIT_WINDOW_SECONDS, DEFAULT_SESSION_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .history.service import HistoryService
from .logs.guard import DuplicateSubmitGuard
from .logs.mysql_log_repository import MySQLLogRepository
from .logs.repository import LogRepository
from .logs.service import RegistrationService
from .summary.service import SummaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class AppSettings:
    session_days: int = DEFAULT_SESSION_DAYS
    double_submit_window_seconds: float = DEFAULT_DOUBLE_SUBMIT_WINDOW_SECONDS

    @classmethod
    def from_module(cls, settings) -> "AppSettings":
        return cls(
            session_days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)),
            double_submit_window_seconds=float(
                getattr(settings, "DOUBLE_SUBMIT_WINDOW_SECONDS", DEFAULT_DOUBLE_SUBMIT_WINDOW_SECONDS)
            ),
        )


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    logs_repo: LogRepository

    auth_service: AuthService
    registration_service: RegistrationService
    history_service: HistoryService
    summary_service: SummaryService
    submit_guard: DuplicateSubmitGuard

    settings: AppSettings = field(default_factory=AppSettings)
    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo: UserRepository,
    logs_repo: LogRepository,
    settings: Optional[AppSettings] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementation."""
    settings = settings or AppSettings()
    return Container(
        users_repo=users_repo,
        logs_repo=logs_repo,
        auth_service=AuthService(users_repo),
        registration_service=RegistrationService(logs_repo),
        history_service=HistoryService(logs_repo),
        summary_service=SummaryService(logs_repo),
        submit_guard=DuplicateSubmitGuard(settings.double_submit_window_seconds),
        settings=settings,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Optional[AppSettings] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        logs_repo=MySQLLogRepository(conn),
        settings=settings,
        conn=conn,
    )
