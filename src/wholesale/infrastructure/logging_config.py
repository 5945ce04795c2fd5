"""Console logging for the CLI process."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    root = logging.getLogger("wholesale")
    root.setLevel(level)
    if not any(getattr(h, "_wholesale", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._wholesale = True  # type: ignore[attr-defined]
        root.addHandler(handler)
