from __future__ import annotations

from datetime import datetime

import pytest

from src.parcel_intake.parcel_intake.core.exceptions import EmptyResponseError, RegistrationRejected, ValidationError
from src.parcel_intake.parcel_intake.logs.model import RegistrationResult
from src.parcel_intake.parcel_intake.logs.service import RegistrationService


class SilentBackend:
    def register_package(self, code, *, user_id, now):
        return None


class RejectingBackend:
    def __init__(self, message):
        self._message = message

    def register_package(self, code, *, user_id, now):
        return RegistrationResult(ok=False, message=self._message, code=code)


def test_register_assigns_sequential_numbers_per_client(logs_repo):
    svc = RegistrationService(logs_repo)
    now = datetime(2026, 3, 2, 9, 0, 0)

    first = svc.register("1001", user_id=1, now=now)
    second = svc.register("1002", user_id=1, now=now.replace(minute=5))
    other = svc.register("2001", user_id=1, now=now.replace(minute=6))

    assert (first.client_name, first.assigned_number, first.total) == ("ACME", 1, 1)
    assert (second.client_name, second.assigned_number, second.total) == ("ACME", 2, 2)
    assert (other.client_name, other.assigned_number, other.total) == ("Globex", 1, 1)


def test_register_trims_code(logs_repo):
    svc = RegistrationService(logs_repo)

    result = svc.register("  1001 \n", user_id=1, now=datetime(2026, 3, 2, 9, 0))

    assert result.code == "1001"
    assert logs_repo.register_calls == ["1001"]


def test_register_rejects_empty_code_without_calling_backend(logs_repo):
    svc = RegistrationService(logs_repo)

    with pytest.raises(ValidationError, match="Ingresa un código"):
        svc.register("   ", user_id=1)

    assert logs_repo.register_calls == []


def test_unknown_code_is_rejected_with_backend_message(logs_repo):
    svc = RegistrationService(logs_repo)

    with pytest.raises(RegistrationRejected, match="Código no registrado"):
        svc.register("9999", user_id=1, now=datetime(2026, 3, 2, 9, 0))


def test_rejection_without_message_uses_fallback():
    svc = RegistrationService(RejectingBackend(None))

    with pytest.raises(RegistrationRejected) as exc:
        svc.register("1001", user_id=1, now=datetime(2026, 3, 2, 9, 0))

    assert str(exc.value) == "Código no registrado. Verifique."


def test_missing_row_raises_empty_response():
    svc = RegistrationService(SilentBackend())

    with pytest.raises(EmptyResponseError, match="No hubo respuesta del servidor."):
        svc.register("1001", user_id=1, now=datetime(2026, 3, 2, 9, 0))


def test_success_message_format():
    result = RegistrationResult(
        ok=True, message="Paquete registrado para ACME.", code="1001", client_name="ACME", assigned_number=7, total=12
    )

    assert RegistrationService.success_message(result) == "Paquete registrado para ACME. Consecutivo: 7. Total: 12."


def test_dashboard_excludes_voided_and_other_days(logs_repo):
    logs_repo.add(created_at=datetime(2026, 3, 1, 23, 59, 59), code="1001", client_name="ACME")
    logs_repo.add(created_at=datetime(2026, 3, 2, 8, 0), code="1001", client_name="ACME")
    logs_repo.add(created_at=datetime(2026, 3, 2, 9, 30, 15), code="2001", client_name="Globex", is_void=True)
    logs_repo.add(created_at=datetime(2026, 3, 3, 0, 0), code="1002", client_name="ACME")

    view = RegistrationService(logs_repo).dashboard(now=datetime(2026, 3, 2, 12, 0))

    assert view.total_today == 1
    assert view.last_client == "Globex"
    assert view.last_time == "09:30:15"


def test_dashboard_on_empty_day(logs_repo):
    view = RegistrationService(logs_repo).dashboard(now=datetime(2026, 3, 2, 12, 0))

    assert view.total_today == 0
    assert view.last_client == "—"
    assert view.last_time == "—"


def test_voiding_does_not_free_the_number(logs_repo):
    from src.parcel_intake.parcel_intake.history.service import HistoryService

    svc = RegistrationService(logs_repo)
    now = datetime(2026, 3, 2, 9, 0)

    first = svc.register("1001", user_id=1, now=now)
    HistoryService(logs_repo).void(logs_repo.rows[0].log_id, user_id=1, now=now)
    second = svc.register("1001", user_id=1, now=now.replace(minute=1))

    assert first.assigned_number == 1
    assert second.assigned_number == 2
    assert second.total == 1


def test_sequence_restarts_each_day(logs_repo):
    svc = RegistrationService(logs_repo)

    today = svc.register("1001", user_id=1, now=datetime(2026, 3, 2, 23, 59))
    tomorrow = svc.register("1001", user_id=1, now=datetime(2026, 3, 3, 0, 1))

    assert today.assigned_number == 1
    assert tomorrow.assigned_number == 1
    assert tomorrow.total == 1
