from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, g, jsonify, redirect, render_template, request, session

from ..container import Container
from ..core.constants import (
    DASHBOARD_ROUTE,
    DEFAULT_SESSION_DAYS,
    LANDING_ROUTE,
    LOGIN_ROUTE,
    ONBOARDING_START_ROUTE,
)
from ..core.exceptions import AuthenticationError, ValidationError
from ..gates.flask_guard import RETURN_TO_KEY, gated, is_safe_return_path
from ..gates.policy import LANDING_POLICY, ONBOARDING_POLICY
from ..session.model import SessionUser

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    def sign_in(user: SessionUser, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["user_id"] = user.user_id

    def after_login_target(user: SessionUser) -> str:
        if not user.onboarding_completed:
            return ONBOARDING_START_ROUTE

        candidate = request.form.get("next") or session.pop(RETURN_TO_KEY, None)
        if is_safe_return_path(candidate):
            return candidate
        return DASHBOARD_ROUTE

    @app.route(LANDING_ROUTE, endpoint="landing")
    @gated(LANDING_POLICY)
    def landing():
        provider = g.get("session_provider")
        return render_template("landing.html", user=provider.user if provider else None)

    @app.route(LOGIN_ROUTE, methods=["GET", "POST"], endpoint="login")
    @gated(LANDING_POLICY)
    def login():
        next_path = request.values.get("next", "")

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = bool(request.form.get("remember_me"))

            try:
                user = container.auth_service.authenticate(email, password)
                target = after_login_target(user)
                sign_in(user, remember=remember)
                flash("Signed in successfully.", "success")
                return redirect(target)
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                log.exception("login failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template("login.html", next_path=next_path if is_safe_return_path(next_path) else "")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        provider = g.get("session_provider")
        if provider is not None:
            provider.clear()
        flash("You have been signed out.", "info")
        return redirect(LANDING_ROUTE)

    @app.route("/onboarding/register", methods=["GET", "POST"], endpoint="register")
    @gated(ONBOARDING_POLICY)
    def register_owner():
        if request.method == "POST":
            try:
                user_id = container.registration_service.register_owner(
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    first_name=request.form.get("firstName", ""),
                    last_name=request.form.get("lastName", ""),
                )
                session.clear()
                session["user_id"] = user_id
                return redirect(ONBOARDING_START_ROUTE)
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                log.exception("registration failed")
                flash("System error while creating the account", "danger")

        return render_template("register.html")

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_auth_login")
    def api_auth_login():
        data = request.get_json(silent=True) or {}
        try:
            user = container.auth_service.authenticate(str(data.get("email", "")), str(data.get("password", "")))
        except AuthenticationError as e:
            return jsonify({"success": False, "message": str(e)}), 401

        token = container.token_service.issue(user.user_id)
        return jsonify({"success": True, "data": {"token": token, "user": user.to_dict()}})
