import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler

from logger.config import (
    BACKUP_COUNT,
    CONSOLE_DATE_FORMAT,
    DATE_FORMAT,
    LOG_DIR,
    LOG_FILE_NAME,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_LOG_SIZE,
)

_lock = threading.Lock()
_is_configured = False


class LevelColorFormatter(logging.Formatter):
    """Colored console formatter, one color per log level."""

    CYAN = "\x1b[36m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    COLORS = {
        logging.DEBUG: CYAN,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._formatters = {
            level: logging.Formatter(
                f"{color}{LOG_FORMAT}{self.RESET}", datefmt=CONSOLE_DATE_FORMAT
            )
            for level, color in self.COLORS.items()
        }
        self._default_formatter = logging.Formatter(
            LOG_FORMAT, datefmt=CONSOLE_DATE_FORMAT
        )

    def format(self, record):
        formatter = self._formatters.get(record.levelno, self._default_formatter)
        return formatter.format(record)


def setup_global_logging():
    """Configures the root logger with a colored console and a rotating log file."""
    global _is_configured

    with _lock:
        if _is_configured:
            return

        root = logging.getLogger()
        root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

        for handler in root.handlers[:]:
            root.removeHandler(handler)

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(LevelColorFormatter())
        root.addHandler(console)

        try:
            os.makedirs(LOG_DIR, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=os.path.join(LOG_DIR, LOG_FILE_NAME),
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setFormatter(
                logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
            )
            root.addHandler(file_handler)
        except OSError as err:
            # Read-only filesystems still get console output.
            root.warning(f"File logging disabled: {err}")

        _is_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger instance for a given name.
    Ensures global logging is configured exactly once.
    """
    if not _is_configured:
        setup_global_logging()
    return logging.getLogger(name)
