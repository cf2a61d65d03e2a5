from __future__ import annotations

import logging

from flask import Flask, render_template, request

from ..common.auth import login_required
from ..common.datetime_utils import now_local, to_date_input_value
from ..common.web import selected_day
from ..container import Container
from .model import DailySummary

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "No se pudo cargar el resumen diario."


def register(app: Flask, container: Container) -> None:
    service = container.summary_service

    @app.route("/summary", methods=["GET"], endpoint="summary")
    @login_required
    def summary():
        day = selected_day(request.args.get("date"))
        capture_mode = request.args.get("capture") == "1"

        error_msg = ""
        try:
            data = service.daily_summary(day)
        except Exception:
            logger.exception("Could not load summary for %s", day)
            error_msg = LOAD_ERROR_MESSAGE
            data = DailySummary(day=day)

        return render_template(
            "summary.html",
            summary=data,
            selected_date=to_date_input_value(day),
            today=to_date_input_value(now_local().date()),
            capture_mode=capture_mode,
            error_msg=error_msg,
            active_page="summary",
        )
