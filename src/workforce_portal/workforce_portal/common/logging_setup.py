"""Process-wide logging configuration.

Call ``setup_logging()`` once at startup; modules log through
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os

log = logging.getLogger(__name__)


def setup_logging(level: str | None = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Quiet third-party HTTP chatter from the upload and API clients.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    log.debug("logging configured at %s", level_name)
