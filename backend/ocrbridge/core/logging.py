"""Logging setup for scripts and embedding applications."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the ``ocrbridge`` logger.

    Calling this more than once only updates the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("ocrbridge")
    logger.setLevel(level)
    if not any(getattr(h, "_ocrbridge", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._ocrbridge = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
