from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.enums import FlashCategory
from ..core.exceptions import AuthenticationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("register_page"))

        email = ""
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.clear()
                session.permanent = True
                app.permanent_session_lifetime = timedelta(days=container.settings.session_days)

                session["user_id"] = s_user.user_id
                session["email"] = s_user.email
                session["name"] = s_user.full_name or s_user.email
                return redirect(url_for("register_page"))
            except AuthenticationError as e:
                flash(str(e), FlashCategory.DANGER.value)
            except Exception:
                logger.exception("Login failed with a system error")
                flash("Error logging in", FlashCategory.DANGER.value)

        return render_template("login.html", email=email)

    @app.route("/logout", endpoint="logout")
    def logout():
        user_id = session.get("user_id")
        session.clear()
        if user_id is not None:
            logger.info("User %s logged out", user_id)
        return redirect(url_for("login"))
