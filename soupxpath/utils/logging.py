"""
Logging helpers for soup-xpath.
Library modules log under the 'soupxpath' logger; applications attach handlers with setup_logging().
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator, Optional

ROOT_LOGGER_NAME = "soupxpath"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(config=None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console and optional file handlers to the package logger.

    Levels come from the logging.console_level and logging.file_level
    settings. Calling it again once handlers are attached does nothing.

    Args:
        config: A Config instance, the defaults if None
        log_file: Path to log file (None for no file logging)

    Returns:
        logging.Logger: The package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if any(not isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        return logger

    if config is None:
        from soupxpath.utils.config import Config
        config = Config()

    handlers = [logging.StreamHandler()]
    levels = [config.get('logging.console_level', "INFO")]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
        levels.append(config.get('logging.file_level', "DEBUG"))

    for handler, level in zip(handlers, levels):
        handler.setLevel(logging.getLevelName(level.upper()))
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(handler)
    logger.setLevel(min(handler.level for handler in handlers))
    return logger


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """
    Log an exception with its traceback.

    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
    """
    exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Logs how long the operations of a component take."""

    def __init__(self, logger: logging.Logger, component: str):
        self.logger = logger
        self.component = component

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """
        Time the enclosed block and log its duration at debug level, even
        when the block raises.

        Args:
            name: Operation name
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            self.logger.debug(f"{self.component} {name} took {duration:.4f} seconds")
