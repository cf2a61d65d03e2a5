from __future__ import annotations

import csv
import io
import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.auth import current_user_id, login_required
from ..common.datetime_utils import now_local, to_date_input_value
from ..common.web import selected_day
from ..core.enums import FlashCategory
from ..core.exceptions import DomainError
from ..container import Container
from .model import HistoryDayView
from .service import EXPORT_FIELDS

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "No se pudo cargar el historial para esa fecha."


def register(app: Flask, container: Container) -> None:
    service = container.history_service

    @app.route("/history", methods=["GET"], endpoint="history")
    @login_required
    def history():
        day = selected_day(request.args.get("date"))
        error_msg = ""
        try:
            view = service.day_view(day)
        except Exception:
            logger.exception("Could not load history for %s", day)
            error_msg = LOAD_ERROR_MESSAGE
            view = HistoryDayView(day=day)

        return render_template(
            "history.html",
            view=view,
            selected_date=to_date_input_value(day),
            today=to_date_input_value(now_local().date()),
            error_msg=error_msg,
            active_page="history",
        )

    @app.route("/history/void/<int:log_id>", methods=["POST"], endpoint="history_void")
    @login_required
    def history_void(log_id: int):
        date_s = request.form.get("date") or None
        try:
            service.void(log_id, user_id=current_user_id())
            flash("Registro anulado.", FlashCategory.SUCCESS.value)
        except DomainError as e:
            flash(f"Error anulando: {e}", FlashCategory.DANGER.value)
        except Exception as e:
            logger.exception("void_log failed for log %s", log_id)
            flash(f"Error anulando: {e}", FlashCategory.DANGER.value)

        return redirect(url_for("history", date=date_s))

    @app.route("/history/export.csv", methods=["GET"], endpoint="history_export")
    @login_required
    def history_export():
        day = selected_day(request.args.get("date"), warn=False)
        try:
            rows = service.export_rows(day)
        except Exception:
            logger.exception("Could not export history for %s", day)
            flash(LOAD_ERROR_MESSAGE, FlashCategory.DANGER.value)
            return redirect(url_for("history", date=to_date_input_value(day)))

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        filename = f"historial_{to_date_input_value(day)}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
