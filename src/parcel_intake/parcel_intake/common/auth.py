from __future__ import annotations

from functools import wraps

from flask import flash, jsonify, redirect, request, session, url_for

from ..core.enums import FlashCategory


def login_required(view):
    """Redirect anonymous users to the login view (JSON endpoints get 401)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            if request.path.startswith("/api/"):
                return jsonify({"ok": False, "message": "Sesión no iniciada"}), 401
            flash("Inicia sesión para continuar.", FlashCategory.WARNING.value)
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int | None:
    value = session.get("user_id")
    return int(value) if value is not None else None
