"""Console logging setup shared by the server and its background tasks."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    root.setLevel(resolved)

    # Idempotent: create_app() may run more than once per process (tests, reload).
    for handler in root.handlers:
        if getattr(handler, "_relay_console", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._relay_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
