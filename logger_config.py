"""
Logging configuration for the game backend wrappers.

Every vendor call outcome is reported as one line on stdout. All wrapper
loggers share a single stdout handler so the outcome lines of GameLift and
PlayFab calls interleave in one stream with one format.
"""
import logging
import os
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_handler: Optional[logging.Handler] = None


def resolve_level(level: Union[str, int, None] = None) -> int:
    """
    Resolve a level name or number to a logging level.

    Args:
        level: Level name such as "debug" or "INFO", a numeric level, or None
            to read LOG_LEVEL from the environment

    Returns:
        Numeric logging level, INFO for unknown names
    """
    if isinstance(level, int):
        return level
    name = (level or os.environ.get('LOG_LEVEL', 'INFO')).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def _stdout_handler() -> logging.Handler:
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return _handler


def get_logger(name: str = None, level: Union[str, int, None] = None) -> logging.Logger:
    """
    Get a logger that writes vendor call outcomes to stdout.

    Args:
        name: Logger name (defaults to this module's name if not provided)
        level: Optional level overriding LOG_LEVEL

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or __name__)
    logger.setLevel(resolve_level(level))

    handler = _stdout_handler()
    if handler not in logger.handlers:
        logger.addHandler(handler)
        # Outcome lines are already on stdout; the root logger would repeat them
        logger.propagate = False

    return logger
