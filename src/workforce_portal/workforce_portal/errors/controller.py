from __future__ import annotations

import logging

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import TooManyRequests

from ..container import Container
from ..core.constants import TOO_MANY_REQUESTS_ROUTE
from ..core.exceptions import AuthorizationError, RateLimitedError

log = logging.getLogger(__name__)


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def register(app: Flask, container: Container) -> None:
    @app.route(TOO_MANY_REQUESTS_ROUTE, endpoint="too_many_requests")
    def too_many_requests():
        return render_template("too_many_requests.html"), 429

    def rate_limited(_e):
        if _wants_json():
            return jsonify({"success": False, "message": "Too many requests"}), 429
        return render_template("too_many_requests.html"), 429

    app.register_error_handler(TooManyRequests, rate_limited)
    app.register_error_handler(RateLimitedError, rate_limited)

    @app.errorhandler(AuthorizationError)
    def forbidden(e):
        log.info("forbidden %s: %s", request.path, e)
        if _wants_json():
            return jsonify({"success": False, "message": str(e)}), 403
        return render_template("403.html", message=str(e)), 403
