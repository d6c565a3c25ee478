"""
Logging configuration for the WasteWise service.

Records from the ``wastewise_api`` package go to stderr and, when
``LOG_FILE`` is set, to that file as well.  uvicorn keeps its own
handlers; only its access log level is aligned with ours so request
lines disappear together with our debug output.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "wastewise_api"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Safe to call once per ``create_app``: handlers are attached only
    the first time, later calls just adjust the level.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"info"``.  Unknown names
        fall back to ``INFO``.
    logfile : Optional[str]
        File to append records to.  Missing parent directories are
        created.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.INFO))

    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
