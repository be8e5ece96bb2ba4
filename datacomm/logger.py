"""
Package logger.

Generators report what they produced at INFO level and which inputs they
had to normalize (dropped characters, clamped windows) at DEBUG level.
Records are written to stdout with the level name colour-coded.
"""

import logging
import sys
from typing import Dict, Union


class ColorFormatter(logging.Formatter):
    """
    Formats a record as one line tinted by its level.
    """

    CYAN = "\x1b[36;20m"
    GREEN = "\x1b[32;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"
    FORMAT = "%(asctime)s [%(levelname)s] [%(name)s/%(filename)s] %(message)s"
    DATEFMT = "%Y-%m-%d %H:%M:%S"

    LEVEL_COLORS = {
        logging.DEBUG: CYAN,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def __init__(self) -> None:
        super().__init__(self.FORMAT, datefmt=self.DATEFMT)
        self._by_level: Dict[int, logging.Formatter] = {
            level: logging.Formatter(f"{color}{self.FORMAT}{self.RESET}", self.DATEFMT)
            for level, color in self.LEVEL_COLORS.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._by_level.get(record.levelno)
        if formatter is None:
            return super().format(record)
        return formatter.format(record)


def get_logger(name: str = "datacomm") -> logging.Logger:
    """
    Returns the named logger, attaching the stdout colour handler on first use.

    Repeated calls never stack handlers, so modules may call this at import.

    Args:
        name: Logger name. Child names (``"datacomm.tdm"``) share the
            package handler through propagation.

    Returns:
        The `logging.Logger`.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColorFormatter())
        logger.addHandler(handler)

    return logger


logger = get_logger()


def set_log_level(level: Union[int, str]) -> None:
    """
    Changes how chatty the generators are.

    Args:
        level: A `logging` level or its name, e.g. ``"DEBUG"`` to see which
            inputs were normalized.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)
