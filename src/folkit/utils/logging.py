"""Console logging setup for folkit."""

import logging
import sys
from typing import Optional, Union

from .config import get_config


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a timestamped console handler to the ``folkit`` logger.

    Args:
        level: Logging level; defaults to ``logging.level`` from the configuration

    Returns:
        Configured logger
    """
    config = get_config()
    if level is None:
        level = config.get("logging.level", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger("folkit")
    logger.setLevel(level)

    # Replace any handler added by a previous call
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        config.get("logging.format", "%(asctime)s [%(levelname)s] %(name)s: %(message)s"),
        datefmt="%H:%M:%S"
    ))
    logger.addHandler(console_handler)

    return logger
