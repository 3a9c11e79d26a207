"""Flask bindings for the gate: turn a GateDecision into a response."""

from __future__ import annotations

from functools import wraps
from typing import Optional
from urllib.parse import urlencode, urlsplit

from flask import g, jsonify, redirect, render_template, request, session

from ..core.constants import LOGIN_ROUTE
from ..core.enums import GateOutcome
from ..session.model import Session
from .gate import evaluate
from .policy import GatePolicy

RETURN_TO_KEY = "return_to"


def current_session() -> Optional[Session]:
    """Snapshot of the request's session provider, None when none is mounted."""
    provider = g.get("session_provider")
    return provider.snapshot() if provider is not None else None


def _location() -> str:
    query = request.query_string.decode("utf-8", "replace")
    return f"{request.path}?{query}" if query else request.path


def is_safe_return_path(path: Optional[str]) -> bool:
    """Same-site absolute path only.

    Browsers drop tabs and newlines from a Location header, so any control
    character or whitespace is refused before the path is parsed.
    """
    if not path or not path.startswith("/") or "\\" in path:
        return False
    if any(ch.isspace() or ord(ch) < 32 or ord(ch) == 127 for ch in path):
        return False
    parts = urlsplit(path)
    return not parts.scheme and not parts.netloc and not path.startswith("//")


def gated(policy: GatePolicy):
    """Page guard: loading placeholder, redirect, or the wrapped view."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            decision = evaluate(current_session(), policy, _location())

            if decision.kind == "loading":
                return render_template("loading.html")

            if decision.is_redirect:
                target = decision.target
                if decision.return_to and is_safe_return_path(decision.return_to):
                    session[RETURN_TO_KEY] = decision.return_to
                    if target == LOGIN_ROUTE:
                        target = f"{target}?{urlencode({'next': decision.return_to})}"
                return redirect(target)

            return view(*args, **kwargs)

        return wrapper

    return decorator


def gated_api(policy: GatePolicy):
    """JSON guard: same decision table, answered with status codes instead of redirects."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            decision = evaluate(current_session(), policy, _location())

            if decision.kind == "loading":
                return jsonify({"success": False, "message": "Session is loading"}), 503

            if decision.is_redirect:
                if decision.outcome == GateOutcome.REDIRECT_LOGIN:
                    return jsonify({"success": False, "message": "Unauthorized"}), 401
                if decision.outcome == GateOutcome.REDIRECT_ONBOARDING:
                    return jsonify(
                        {
                            "success": False,
                            "message": "Onboarding incomplete. Please complete company setup.",
                            "code": "ONBOARDING_REQUIRED",
                            "requiresOnboarding": True,
                        }
                    ), 403
                return jsonify({"success": False, "message": "Not available", "redirect": decision.target}), 409

            return view(*args, **kwargs)

        return wrapper

    return decorator

