"""
Console logging for the route planner.

The API entry point and the seeding script call setup_logging once at
start-up; library modules only create module-level loggers.
"""

import logging
import sys
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(funcName)s():%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that are chatty at INFO and say nothing about route searches
QUIET_LOGGERS = ("httpx", "uvicorn.access")

_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


class _ColoredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # Colour a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = _LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(record)


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level name ('debug', 'INFO', ...) or number into a level number.

    Raises:
        ValueError: If the name is not a logging level.
    """
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {name}")
    return value


def setup_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Replace the root handlers with a single console handler.

    Args:
        level: Root level, as a number or a name.
        stream: Output stream. Defaults to stdout; colours are used only
            when it is a TTY.
    """
    level = resolve_level(level)
    stream = stream or sys.stdout

    is_tty = hasattr(stream, "isatty") and stream.isatty()
    formatter_cls = _ColoredFormatter if is_tty else logging.Formatter

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
