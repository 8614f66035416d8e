"""Logging configuration for the schemashift library."""

import logging
import logging.handlers
import sys
from pathlib import Path

import colorlog

LOG_FORMAT = "%(asctime)s %(levelname)8s %(message)s (%(name)s@%(filename)s:%(lineno)d)"
COLOR_LOG_FORMAT = (
    "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
    "\033[90m(%(name)s@%(filename)s:%(lineno)d)\033[0m"
)
DATE_FORMAT = "%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(
    level: int | str = logging.INFO,
    use_colors: bool = True,
    log_file: Path | None = None,
    overwrite: bool = False,
) -> None:
    """Configure logging for schemashift.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        use_colors: Whether to colorize console output
        log_file: Optional file to log to in addition to the console
        overwrite: Truncate log_file instead of rotating it
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handlers = [_console_handler(use_colors)]
    if log_file is not None:
        handlers.append(_file_handler(log_file, overwrite))

    logging.basicConfig(level=level, handlers=handlers, force=True)


def _console_handler(use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if use_colors:
        formatter: logging.Formatter = colorlog.ColoredFormatter(
            COLOR_LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS,
            style="%",
        )
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handler.setFormatter(formatter)
    return handler


def _file_handler(log_file: Path, overwrite: bool) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    if overwrite:
        handler: logging.Handler = logging.FileHandler(log_file, mode="w")
    else:
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=4,
            encoding="utf-8",
        )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a schemashift module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_production_logging(level: int | str = logging.INFO) -> None:
    """Log to the console and to a rotating logs/schemashift.log."""
    setup_logging(level=level, log_file=Path("logs") / "schemashift.log")


def setup_test_logging(level: int | str = logging.DEBUG) -> None:
    """Log to the console and to logs/test/test.log, overwritten per run."""
    setup_logging(
        level=level,
        log_file=Path("logs") / "test" / "test.log",
        overwrite=True,
    )
