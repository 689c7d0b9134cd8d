"""Logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module wires
the handlers once for the ``dummydata`` logger tree. A rotating file handler
is attached only when a log directory is configured.
"""
from __future__ import annotations

import logging
import logging.handlers
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"
ROOT_LOGGER = "dummydata"


def configure_logging(level: str = "INFO",
                      log_dir: Optional[str] = None,
                      *,
                      filename: str = "dummydata.log",
                      max_bytes: int = 5 * 1024 * 1024,
                      backup_count: int = 3) -> logging.Logger:
    """Attach a stream handler (and optionally a rotating file handler) to the package logger.

    Safe to call more than once: the stream handler is added once, and a file
    handler is added the first time a given log file is requested.
    Returns the configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, "_dummydata", False) for h in logger.handlers):
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        h._dummydata = True
        logger.addHandler(h)

    if log_dir:
        log_path = os.path.abspath(os.path.join(log_dir, filename))
        has_file = any(
            isinstance(h, logging.handlers.RotatingFileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )
        if not has_file:
            os.makedirs(log_dir, exist_ok=True)
            fh = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(fh)

    return logger
