"""
Logging Setup
=============
Coloured console output on stderr plus one log file per day under LOG_DIR.
Both handlers share LOG_FORMAT; only the console adds ANSI colours.
"""
import logging
import sys
import os
from datetime import datetime

from bug_extractor.core.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers whose level follows the configured one.
MANAGED_LOGGERS = ("bug_extractor", "uvicorn", "uvicorn.error", "uvicorn.access", "main")


class ColoredFormatter(logging.Formatter):
    """Wraps each console record in the colour of its level."""

    reset = "\x1b[0m"
    LEVEL_COLOURS = {
        logging.DEBUG: "\x1b[36m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31;1m",
    }

    def __init__(self):
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record):
        line = super().format(record)
        colour = self.LEVEL_COLOURS.get(record.levelno)
        if not colour:
            return line
        return f"{colour}{line}{self.reset}"


def log_file_path(log_dir: str, day: datetime = None) -> str:
    day = day or datetime.now()
    return os.path.join(log_dir, f"extractor_{day.strftime('%Y%m%d')}.log")


def setup_logging(level=None, log_dir=None):
    """Setup centralized logging: coloured console on stderr plus a daily log file."""
    level = level if level is not None else getattr(logging, LOG_LEVEL, logging.INFO)
    log_dir = log_dir or LOG_DIR

    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter())
    root_logger.addHandler(console_handler)

    os.makedirs(log_dir, exist_ok=True)
    file_handler = logging.FileHandler(log_file_path(log_dir), encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(file_handler)

    for name in MANAGED_LOGGERS:
        managed = logging.getLogger(name)
        managed.setLevel(level)
        managed.propagate = True

    root_logger.info("Logging initialized (console + file in %s).", log_dir)
