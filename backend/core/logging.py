"""Console logging setup shared by the core command-line tools."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "backend-console"


def configure_console_log(debug: bool = False, logger_name: str = "backend") -> logging.Logger:
    """
    Attach one stream handler to ``logger_name`` (every core module logs
    below it) and set the level. Safe to call repeatedly.
    """
    logger = logging.getLogger(logger_name)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger


__all__ = ["configure_console_log", "LOG_FORMAT", "LOG_DATE_FORMAT"]
