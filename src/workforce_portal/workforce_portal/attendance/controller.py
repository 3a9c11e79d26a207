from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from flask import Flask, flash, g, jsonify, redirect, render_template, request, url_for

from ..company.model import CompanySettings
from ..container import Container
from ..core.constants import DASHBOARD_ROUTE
from ..core.enums import ClockMethod
from ..core.exceptions import AuthorizationError, ValidationError
from ..gates.flask_guard import gated, gated_api
from ..gates.policy import DASHBOARD_POLICY
from .clock import requires_biometrics

log = logging.getLogger(__name__)


def parse_timestamp(raw) -> Optional[datetime]:
    """ISO-8601 clock time as naive local time; None when absent."""
    if not raw:
        return None
    text = str(raw)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        # Offline-queued actions arrive with the time they were captured.
        value = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError("Invalid timestamp")
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def register(app: Flask, container: Container) -> None:
    def current_user():
        return g.session_provider.user

    def settings_for(user) -> Optional[CompanySettings]:
        if user.company_id is None:
            return None
        try:
            return container.company_settings_service.get_settings(user.company_id)
        except ValidationError:
            return None

    def parse_method(raw) -> ClockMethod:
        try:
            return ClockMethod(raw or ClockMethod.MANUAL.value)
        except ValueError:
            raise ValidationError("Unknown clock method")

    @app.route(DASHBOARD_ROUTE, endpoint="dashboard")
    @gated(DASHBOARD_POLICY)
    def dashboard():
        user = current_user()
        settings = settings_for(user)
        today = container.attendance_service.get_today_record(user.user_id)
        history = container.attendance_service.get_history(user.user_id)
        return render_template(
            "dashboard.html",
            user=user,
            settings=settings,
            today=today,
            history=history,
            biometric_clocking=requires_biometrics(user, settings),
            active_page="dashboard",
        )

    def clock_from_dashboard(action: str):
        user = current_user()
        biometrics_required = requires_biometrics(user, settings_for(user))
        try:
            if action == "in":
                container.attendance_service.clock_in(user.user_id, biometrics_required=biometrics_required)
                flash("Clocked in.", "success")
            else:
                container.attendance_service.clock_out(user.user_id, biometrics_required=biometrics_required)
                flash("Clocked out.", "success")
        except AuthorizationError:
            flash("Your company requires biometric clocking. Use the mobile app.", "warning")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            log.exception("clock %s failed for user %s", action, user.user_id)
            flash("System error while recording attendance", "danger")
        return redirect(url_for("dashboard"))

    @app.route("/dashboard/clock-in", methods=["POST"], endpoint="dashboard_clock_in")
    @gated(DASHBOARD_POLICY)
    def dashboard_clock_in():
        return clock_from_dashboard("in")

    @app.route("/dashboard/clock-out", methods=["POST"], endpoint="dashboard_clock_out")
    @gated(DASHBOARD_POLICY)
    def dashboard_clock_out():
        return clock_from_dashboard("out")

    def clock_from_api(action: str):
        user = current_user()
        data = request.get_json(silent=True) or {}
        try:
            method = parse_method(data.get("method"))
            at = parse_timestamp(data.get("timestamp"))
            biometrics_required = requires_biometrics(user, settings_for(user))
            if action == "in":
                record = container.attendance_service.clock_in(
                    user.user_id, method=method, biometrics_required=biometrics_required, at=at
                )
            else:
                record = container.attendance_service.clock_out(
                    user.user_id, method=method, biometrics_required=biometrics_required, at=at
                )
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            log.exception("api clock %s failed for user %s", action, user.user_id)
            return jsonify({"success": False, "message": "System error while recording attendance"}), 500
        return jsonify({"success": True, "data": record.to_dict()})

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    @gated_api(DASHBOARD_POLICY)
    def api_clock_in():
        return clock_from_api("in")

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    @gated_api(DASHBOARD_POLICY)
    def api_clock_out():
        return clock_from_api("out")
