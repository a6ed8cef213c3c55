from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", *, name: str = "timeclock") -> logging.Logger:
    """Attach a single console handler to the package logger.

    Safe to call more than once: existing handlers are replaced.
    """
    logger = logging.getLogger(name)
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    logger.handlers.clear()
    logger.setLevel(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)
    return logger
