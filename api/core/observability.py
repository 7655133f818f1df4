"""
Logging setup.

Loggers are plain `logging.getLogger(__name__)` module loggers. Messages are
an event name followed by key=value pairs, e.g.
`record_updated kind=seccion id=3 user=admin2`.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger once per process (called from the app lifespan).
    """
    resolved = getattr(logging, (level or log_level()).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved)
