"""Package-wide logging for the ``sms`` logger tree."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from sms.infrastructure.config import Settings

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "sms.log"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach console and (optionally) rotating file handlers to ``sms``.

    Safe to call more than once; handlers are only installed the first time.
    """
    logger = logging.getLogger("sms")
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if settings.log_dir is not None:
        log_file = settings.log_dir / LOG_FILE_NAME
        try:
            settings.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=1_000_000,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as exc:
            print(
                f"Warning: unable to initialize log file at '{log_file}': {exc}",
                file=sys.stderr,
            )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
