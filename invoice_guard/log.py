"""
Logging setup for the service.

Modules log through `logging.getLogger(__name__)`; this only attaches a
single stream handler to the package logger so messages show up next to
uvicorn's own output.
"""

from __future__ import annotations

import logging

from .config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    logger = logging.getLogger("invoice_guard")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] %(levelname)s %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
