# File: src/mstair/xrepr/xlogging/logger_factory.py
"""
Logger factory for creating CoreLogger instances inside the stdlib logging hierarchy.
"""

import logging
import sys
from pathlib import Path

from mstair.xrepr.xlogging.core_logger import CoreLogger


__all__ = ["create_logger"]


def create_logger(
    name: str | None,
    *,
    level: int | str | None = None,
) -> CoreLogger:
    """
    Return the CoreLogger for a name, creating it if needed.

    - "__main__" is replaced by the script's stem so log lines stay meaningful.
    - An explicit level is applied to new and existing loggers alike.

    :param name: Logger name, usually `__name__`.
    :param level: Optional explicit level; otherwise resolved from the environment.
    :return CoreLogger: The logger.
    :raises TypeError: If a plain logging.Logger already holds the name.
    """
    logger_name: str = name or ""
    if logger_name == "__main__" or not logger_name:
        arg0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
        logger_name = arg0.stem if arg0 and arg0.stem else "main"

    existing = logging.Logger.manager.loggerDict.get(logger_name)
    if isinstance(existing, CoreLogger):
        if level is not None:
            existing.setLevel(level)
        return existing
    logger = _get_core_logger_from_logging(logger_name)
    if level is not None:
        logger.setLevel(level)
    return logger


def _get_core_logger_from_logging(name: str) -> CoreLogger:
    """
    Create or retrieve a CoreLogger through logging.getLogger().

    Temporarily sets CoreLogger as the logger class so the logger gets proper
    parent relationships and propagation (which caplog relies on).

    :param name: Logger name.
    :return: CoreLogger instance.
    :raises TypeError: If getLogger() returns wrong type.
    """
    logging_class = logging.getLoggerClass()
    if logging_class is not CoreLogger:
        logging.setLoggerClass(CoreLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        if logging_class is not CoreLogger:
            logging.setLoggerClass(logging_class)
    if not isinstance(logger, CoreLogger):
        raise TypeError(f"Failed to create CoreLogger: {logger!r}")
    return logger


# End of file: src/mstair/xrepr/xlogging/logger_factory.py
