from __future__ import annotations

import logging

from flask import Flask, current_app, g, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_MAX_UPLOAD_BYTES
from ..core.exceptions import AuthorizationError, UploadError, ValidationError
from ..gates.flask_guard import gated_api
from ..gates.policy import DASHBOARD_POLICY
from .client import UPLOAD_FAILED
from .validation import IMAGE_MIME_TYPES, compute_file_hash, validate_upload

log = logging.getLogger(__name__)

COMPANY_LOGO_PURPOSE = "company-logo"


def register(app: Flask, container: Container) -> None:
    @app.route("/api/files/upload", methods=["POST"], endpoint="api_files_upload")
    @gated_api(DASHBOARD_POLICY)
    def api_files_upload():
        image = request.files.get("image")
        if image is None or not image.filename:
            return jsonify({"success": False, "message": "No image provided"}), 400

        content = image.read()
        mime_type = image.mimetype or "application/octet-stream"
        check = validate_upload(
            image.filename,
            len(content),
            mime_type,
            max_size=int(current_app.config.get("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
            allowed_types=IMAGE_MIME_TYPES,
        )
        if not check.is_valid:
            return jsonify({"success": False, "message": check.error}), 400

        try:
            result = container.upload_client.upload(image.filename, content, mime_type)
        except UploadError:
            return jsonify({"success": False, "message": UPLOAD_FAILED}), 502

        data = dict(result.to_dict(), hash=compute_file_hash(content))
        if check.warnings:
            data["warnings"] = list(check.warnings)

        if request.form.get("purpose") == COMPANY_LOGO_PURPOSE:
            try:
                container.company_settings_service.set_logo(actor=g.session_provider.user, logo_url=result.url)
            except AuthorizationError as e:
                return jsonify({"success": False, "message": str(e)}), 403
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400

        return jsonify({"success": True, "data": data})
