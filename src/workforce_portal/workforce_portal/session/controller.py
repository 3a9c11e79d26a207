from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, g, jsonify, request, session

from ..container import Container
from ..core.exceptions import AuthenticationError
from .model import ANONYMOUS
from .provider import SessionProvider
from .source import RepositoryUserSource

log = logging.getLogger(__name__)


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return None


def register(app: Flask, container: Container) -> None:
    def resolve_user_id() -> Optional[int]:
        if "user_id" in session:
            return int(session["user_id"])

        token = bearer_token()
        if token:
            try:
                return container.token_service.verify(token)
            except AuthenticationError as e:
                log.info("rejected bearer token: %s", e)
        return None

    @app.before_request
    def mount_session_provider():
        if request.endpoint == "static":
            return None

        source = RepositoryUserSource(container.users_repo, container.companies_repo, resolve_user_id())
        provider = SessionProvider(source, current_path=request.path)
        g.session_provider = provider
        provider.fetch()

        # A cookie pointing at a deleted or disabled user is a signed-out session.
        if provider.user is None and "user_id" in session:
            session.pop("user_id", None)
        return None

    @app.route("/api/auth/me", endpoint="api_auth_me")
    def api_auth_me():
        provider = g.get("session_provider")
        current = provider.snapshot() if provider is not None else ANONYMOUS
        if not current.is_authenticated:
            return jsonify({"success": False, "message": "Not authenticated"}), 401
        return jsonify({"success": True, "data": current.user.to_dict()})
