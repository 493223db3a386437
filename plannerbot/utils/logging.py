"""Console logging configuration for PlannerBot."""

import logging
import os
import sys
from typing import Any, Optional

from colorlog import ColoredFormatter

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

ROOT_LOGGER_NAME = "plannerbot"

CONSOLE_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "VERBOSE": "blue",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def verbose(self: logging.Logger, message: Any, *args: Any, **kwargs: Any) -> None:
    """Log at the VERBOSE level (more detail than INFO, less than DEBUG).

    Example:
        >>> logger = logging.getLogger(__name__)
        >>> logger.verbose("Expanded %d occurrences", count)
    """
    if self.isEnabledFor(VERBOSE):
        self._log(VERBOSE, message, args, **kwargs)


logging.Logger.verbose = verbose  # type: ignore[attr-defined]


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name, including custom VERBOSE level.

    Args:
        level_name: Log level name (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL),
            case insensitive

    Returns:
        Numeric log level

    Raises:
        ValueError: If level name is not recognized
    """
    name = level_name.strip().upper()
    if name == "VERBOSE":
        return VERBOSE
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


def _debug_forced() -> bool:
    return os.environ.get("PLANNERBOT_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")


def _build_formatter(colors: bool) -> logging.Formatter:
    if colors:
        return ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LOG_COLORS)
    return logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    level: str = "INFO",
    colors: bool = True,
    stream: Optional[Any] = None,
) -> logging.Logger:
    """Configure the ``plannerbot`` logger hierarchy for console output.

    Re-running replaces the previously installed handler instead of stacking a
    second one. Setting PLANNERBOT_DEBUG to a truthy value forces DEBUG.

    Args:
        level: Console log level name
        colors: Colorize the level name with colorlog
        stream: Output stream (defaults to stderr)

    Returns:
        The configured ``plannerbot`` logger
    """
    numeric_level = logging.DEBUG if _debug_forced() else get_log_level(level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_plannerbot_console", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(_build_formatter(colors))
    handler.setLevel(numeric_level)
    handler._plannerbot_console = True  # type: ignore[attr-defined]  # noqa: SLF001

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False

    logger.debug("Logging initialized at level %s", logging.getLevelName(numeric_level))
    return logger
