"""Client for the image upload worker.

``POST {endpoint}/upload`` with multipart fields ``image`` and ``client``.
A 2xx answer carries ``{key, url}``; anything else is an upload failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from ..core.constants import DEFAULT_UPLOAD_CLIENT, DEFAULT_UPLOAD_TIMEOUT_SECONDS
from ..core.exceptions import UploadError

log = logging.getLogger(__name__)

UPLOAD_FAILED = "Upload failed"


@dataclass(frozen=True)
class UploadResult:
    key: str
    url: str

    def to_dict(self) -> dict:
        return {"key": self.key, "url": self.url}


class UploadClient:
    def __init__(
        self,
        endpoint: str,
        *,
        client_name: str = DEFAULT_UPLOAD_CLIENT,
        timeout: int = DEFAULT_UPLOAD_TIMEOUT_SECONDS,
    ):
        self._upload_url = f"{endpoint.rstrip('/')}/upload"
        self._client_name = client_name
        self._timeout = timeout

    def upload(self, filename: str, content: bytes, mime_type: str) -> UploadResult:
        try:
            resp = requests.post(
                self._upload_url,
                files={"image": (filename, content, mime_type)},
                data={"client": self._client_name},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            log.error("network error while uploading %s: %s", filename, e)
            raise UploadError(UPLOAD_FAILED) from e

        if not 200 <= resp.status_code < 300:
            log.error("upload of %s rejected: HTTP %s", filename, resp.status_code)
            raise UploadError(UPLOAD_FAILED)

        try:
            body = resp.json()
        except ValueError as e:
            raise UploadError(UPLOAD_FAILED) from e

        key = body.get("key") if isinstance(body, dict) else None
        url = body.get("url") if isinstance(body, dict) else None
        if not key or not url:
            log.error("upload of %s returned no key/url", filename)
            raise UploadError(UPLOAD_FAILED)

        log.info("uploaded %s as %s (%d bytes)", filename, key, len(content))
        return UploadResult(key=str(key), url=str(url))
