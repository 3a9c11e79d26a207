from __future__ import annotations

import logging

from flask import Flask, flash, g, jsonify, redirect, render_template, request, url_for

from ..container import Container
from ..core.constants import DASHBOARD_ROUTE, ONBOARDING_START_ROUTE
from ..core.exceptions import AuthorizationError, ValidationError
from ..gates.flask_guard import gated, gated_api
from ..gates.policy import DASHBOARD_POLICY, ONBOARDING_POLICY
from .service import SETTINGS_ADMIN_ROLES

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def current_user():
        return g.session_provider.user

    @app.route(ONBOARDING_START_ROUTE, methods=["GET", "POST"], endpoint="company_setup")
    @gated(ONBOARDING_POLICY)
    def company_setup():
        user = current_user()
        if user is None:
            return redirect(url_for("register"))

        if request.method == "POST":
            try:
                container.onboarding_service.complete_company_setup(
                    user_id=user.user_id,
                    company_name=request.form.get("companyName", ""),
                    biometrics_required=bool(request.form.get("biometricsRequired")),
                )
                g.session_provider.refetch()
                flash("Your company is ready.", "success")
                return redirect(DASHBOARD_ROUTE)
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                log.exception("company setup failed")
                flash("System error while saving company setup", "danger")

        return render_template("company_setup.html", user=user)

    @app.route("/dashboard/settings", methods=["GET", "POST"], endpoint="company_settings")
    @gated(DASHBOARD_POLICY)
    def company_settings():
        user = current_user()
        if not g.session_provider.has_role(SETTINGS_ADMIN_ROLES):
            raise AuthorizationError("Only owners and admins can manage company settings")

        if request.method == "POST":
            try:
                container.company_settings_service.set_biometrics_required(
                    actor=user,
                    required=bool(request.form.get("biometricsRequired")),
                )
                flash("Settings saved.", "success")
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                log.exception("saving company settings failed")
                flash("System error while saving settings", "danger")
            return redirect(url_for("company_settings"))

        settings = None
        if user.company_id is not None:
            try:
                settings = container.company_settings_service.get_settings(user.company_id)
            except ValidationError as e:
                flash(str(e), "warning")
        return render_template("settings.html", user=user, settings=settings, active_page="settings")

    @app.route("/api/company-settings", methods=["GET"], endpoint="api_company_settings")
    @gated_api(DASHBOARD_POLICY)
    def api_company_settings():
        user = current_user()
        if user.company_id is None:
            return jsonify({"success": False, "message": "Company not found"}), 404
        try:
            settings = container.company_settings_service.get_settings(user.company_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        return jsonify({"success": True, "data": settings.to_dict()})

    @app.route("/api/company-settings", methods=["PUT"], endpoint="api_update_company_settings")
    @gated_api(DASHBOARD_POLICY)
    def api_update_company_settings():
        data = request.get_json(silent=True) or {}
        try:
            settings = container.company_settings_service.set_biometrics_required(
                actor=current_user(),
                required=data.get("biometrics_required"),
            )
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, "data": settings.to_dict()})
