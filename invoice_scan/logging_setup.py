from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send ``invoice_scan`` log records to stderr at the given level."""
    root = logging.getLogger("invoice_scan")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_invoice_scan", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._invoice_scan = True  # type: ignore[attr-defined]
        root.addHandler(handler)
