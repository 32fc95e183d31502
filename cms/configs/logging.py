"""
CMS Logging

All CMS loggers live under "cms". Storage reconciliation failures are
logged rather than raised to the client, so the log file is where a
failed image cleanup shows up.

Environment:
- CMS_DEBUG: debug level
- CMS_LOG_FILE: log file ("" = stderr only; unset = <data dir>/server.log)
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from cms.configs.paths import get_data_path

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# httpx logs every storage request at INFO; the storage client logs its own summaries
QUIET_LOGGERS = ("httpx", "httpcore")


def _resolve_log_file(log_file: Optional[str]) -> str:
    if log_file is not None:
        return log_file
    env_file = os.environ.get("CMS_LOG_FILE")
    if env_file is not None:
        return env_file
    return str(get_data_path() / "server.log")


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the "cms" logger. Safe to call more than once.

    With a log file, stderr only gets warnings and above (sync and purge
    errors); the file gets everything at the chosen level.
    """
    if debug is None:
        debug = os.environ.get("CMS_DEBUG", "").lower() in ("true", "1", "yes")
    log_file = _resolve_log_file(log_file)
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger("cms")
    logger.setLevel(level)
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING if log_file else level)
    logger.addHandler(stderr_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    return logger


def get_logger(component: str) -> logging.Logger:
    """Logger for a component, e.g. get_logger("storage.gc.sync") -> "cms.storage.gc.sync"."""
    return logging.getLogger(f"cms.{component}")
