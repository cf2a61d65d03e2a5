from __future__ import annotations

import logging
import time

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.auth import current_user_id, login_required
from ..core.enums import FlashCategory
from ..core.exceptions import DomainError
from ..container import Container
from .service import EMPTY_CODE_MESSAGE, SYSTEM_ERROR_MESSAGE

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.registration_service
    guard = container.submit_guard

    def _accept_submission(code: str) -> bool:
        return guard.check(current_user_id(), code, time.time())

    @app.route("/", methods=["GET"], endpoint="register_page")
    @login_required
    def register_page():
        dashboard = None
        try:
            dashboard = service.dashboard()
        except Exception:
            # The form must stay usable even if the dashboard query fails.
            logger.exception("Could not load the registration dashboard")

        return render_template(
            "register.html",
            dashboard=dashboard,
            code=request.args.get("code", ""),
            active_page="register",
        )

    @app.route("/register", methods=["POST"], endpoint="register_submit")
    @login_required
    def register_submit():
        raw_code = request.form.get("code", "")
        try:
            code = service.normalize_code(raw_code)
            if not _accept_submission(code):
                return redirect(url_for("register_page"))

            result = service.register(code, user_id=current_user_id())
            flash(service.success_message(result), FlashCategory.SUCCESS.value)
            return redirect(url_for("register_page"))
        except DomainError as e:
            flash(str(e), FlashCategory.DANGER.value)
        except Exception:
            logger.exception("register_package failed for code %r", raw_code)
            flash(SYSTEM_ERROR_MESSAGE, FlashCategory.DANGER.value)

        return redirect(url_for("register_page", code=raw_code.strip() or None))

    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    @login_required
    def api_register():
        """JSON endpoint for barcode scanners and keyboard wedges."""
        raw_code = ""
        try:
            data = request.get_json(silent=True) or {}
            if not isinstance(data, dict):
                return jsonify({"ok": False, "message": EMPTY_CODE_MESSAGE}), 400
            raw_code = str(data.get("code") or "")
            code = service.normalize_code(raw_code)
            if not _accept_submission(code):
                return jsonify({"ok": False, "ignored": True, "message": "Envío duplicado ignorado."}), 200

            result = service.register(code, user_id=current_user_id())
            payload = result.as_dict()
            payload["message"] = service.success_message(result)
            return jsonify(payload), 200
        except DomainError as e:
            return jsonify({"ok": False, "message": str(e)}), 400
        except Exception:
            logger.exception("register_package failed for code %r", raw_code)
            return jsonify({"ok": False, "message": SYSTEM_ERROR_MESSAGE}), 500

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @login_required
    def api_dashboard():
        try:
            return jsonify({"ok": True, **service.dashboard().as_dict()}), 200
        except Exception:
            logger.exception("Could not load the registration dashboard")
            return jsonify({"ok": False, "message": SYSTEM_ERROR_MESSAGE}), 500
