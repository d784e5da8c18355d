"""
Logging Configuration Module.

All renderer modules log under the "einvoice_pdf" namespace. The batch
driver configures that namespace once from the logging section of
settings.yaml: a coloured console handler for per-file progress and the
final summary, plus an optional rotating log file.

Usage:
    from einvoice_pdf.utils.logger import setup_logger_from_config, get_logger

    setup_logger_from_config()      # once, at startup
    logger = get_logger(__name__)   # in every module
    logger.info("Processing: 24322000000012345678.xml...")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import colorama
from colorama import Fore, Style

colorama.init()

LOGGER_NAMESPACE = "einvoice_pdf"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours each line by level."""

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        return f"{self.LEVEL_COLORS.get(record.levelno, '')}{line}{Style.RESET_ALL}"


def _level(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    log_file: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Configure the application logger.

    Calling it again replaces the handlers from the previous call, so
    the level can be changed after command-line flags are read.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        log_format: Record format; DEFAULT_FORMAT when omitted.
        date_format: Timestamp format; DEFAULT_DATE_FORMAT when omitted.
        log_file: Path of a rotating log file, or None for console only.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept.
        colorize: Colour console lines by level.

    Returns:
        The "einvoice_pdf" logger.
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    numeric_level = _level(level)

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    app_logger.setLevel(numeric_level)
    app_logger.handlers.clear()

    formatter_class = ColoredFormatter if colorize else logging.Formatter
    app_logger.addHandler(
        _console_handler(numeric_level, formatter_class(log_format, datefmt=date_format))
    )

    if log_file:
        app_logger.addHandler(_file_handler(
            log_file,
            numeric_level,
            logging.Formatter(log_format, datefmt=date_format),
            max_bytes,
            backup_count,
        ))

    # Progress lines go to our handlers only, never twice via the root logger
    app_logger.propagate = False

    app_logger.debug("Logging initialized")
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for one module, placed under the application namespace.

    Example:
        >>> get_logger("main").name
        'einvoice_pdf.main'
    """
    if name.startswith(LOGGER_NAMESPACE):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """Configure the application logger from the logging section of settings.yaml."""
    from config import get_config

    log_file = None
    if get_config("logging.file.enabled", False):
        log_file = get_config("logging.file.path")

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", 10485760),
        backup_count=get_config("logging.file.backup_count", 5),
        colorize=get_config("logging.console.colorize", True),
    )
