"""Logging configuration for ipcheck.

Log output goes to stderr; stdout carries only the report.
Uses % formatting (PEP 391) so provider strings are never
interpreted as format directives.
"""

import logging
import sys
from pathlib import Path

from config import Color

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty HTTP stack loggers, held at WARNING unless verbose
QUIET_LOGGERS = ("urllib3", "requests")

# Marks handlers installed by setup_logging
_HANDLER_TAG = "_ipcheck_handler"


class ColoredFormatter(logging.Formatter):
    """Color level names with the report palette."""

    COLORS = {
        "DEBUG": Color.CYAN,
        "INFO": Color.GREEN,
        "WARNING": Color.YELLOW,
        "ERROR": Color.RED,
        "CRITICAL": Color.MAGENTA,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a colored level name.

        The level name is only colored for this call, so handlers that
        share the record (e.g. the file handler) see the plain name.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with color codes.
        """
        levelname = record.levelname
        color = self.COLORS.get(levelname)
        if color is None:
            return super().format(record)

        record.levelname = f"{color}{levelname}{Color.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    use_colors: bool = True,
) -> None:
    """Configure logging.

    Safe to call more than once: handlers from an earlier call are
    replaced, not duplicated.

    Args:
        verbose: Enable DEBUG level (default: WARNING+ only)
        log_file: Optional file output path, always written at DEBUG
        use_colors: Color level names on the console
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    _remove_installed_handlers(root_logger)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    formatter_class = ColoredFormatter if use_colors else logging.Formatter
    console_handler.setFormatter(formatter_class(CONSOLE_FORMAT))
    _install_handler(root_logger, console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        _install_handler(root_logger, file_handler)
        # File output is always DEBUG, so the root must let records through
        root_logger.setLevel(logging.DEBUG)

    if not verbose:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance for the module.
    """
    return logging.getLogger(name)


def _install_handler(root_logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG, True)
    root_logger.addHandler(handler)


def _remove_installed_handlers(root_logger: logging.Logger) -> None:
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()
