from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import day_bounds, format_time, now_local
from ..common.validators import require_non_empty
from ..core.constants import EMPTY_PLACEHOLDER
from ..core.exceptions import EmptyResponseError, RegistrationRejected
from .model import DashboardView, RegistrationResult
from .repository import LogRepository

logger = logging.getLogger(__name__)

EMPTY_CODE_MESSAGE = "Ingresa un código antes de registrar."
NO_RESPONSE_MESSAGE = "No hubo respuesta del servidor."
REJECTED_FALLBACK_MESSAGE = "Código no registrado. Verifique."
SYSTEM_ERROR_MESSAGE = "Error del sistema. Revisa los logs del servidor."


class RegistrationService:
    """Use case: register an incoming package by its code."""

    def __init__(self, logs: LogRepository):
        self._logs = logs

    @staticmethod
    def normalize_code(raw: Optional[str]) -> str:
        return require_non_empty(raw, EMPTY_CODE_MESSAGE)

    def register(self, code: str, *, user_id: Optional[int], now: Optional[datetime] = None) -> RegistrationResult:
        code = self.normalize_code(code)
        now = now or now_local()

        result = self._logs.register_package(code, user_id=user_id, now=now)
        if result is None:
            raise EmptyResponseError(NO_RESPONSE_MESSAGE)
        if not result.ok:
            logger.info("Code %r rejected: %s", code, result.message)
            raise RegistrationRejected(result.message or REJECTED_FALLBACK_MESSAGE)
        return result

    @staticmethod
    def success_message(result: RegistrationResult) -> str:
        return f"{result.message} Consecutivo: {result.assigned_number}. Total: {result.total}."

    def dashboard(self, *, now: Optional[datetime] = None) -> DashboardView:
        """Total of today's non-voided logs plus the newest log of the day."""
        now = now or now_local()
        start, end = day_bounds(now.date())

        total = self._logs.count_for_range(start, end, include_void=False)
        last = self._logs.latest_for_range(start, end)

        return DashboardView(
            total_today=int(total),
            last_client=last.client_name if last else EMPTY_PLACEHOLDER,
            last_time=format_time(last.created_at if last else None),
        )
