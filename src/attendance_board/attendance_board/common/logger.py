from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "attendance_board"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def configure_logging(*, level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """Configure the application logger once per process.

    Console output is always on; a rotating ``attendance.log`` (5MB x 3) is
    added when ``log_dir`` is given. Calling this again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(exist_ok=True, parents=True)
        file_handler = RotatingFileHandler(
            path / "attendance.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the application logger, e.g. ``attendance_board.attendance``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
