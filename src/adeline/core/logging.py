"""Logging setup for the Adeline CLI.

Modules log through ``logging.getLogger(__name__)`` and never attach
handlers of their own. Output goes through a single stderr handler on
the root logger, installed here.
"""

import logging
import sys
from typing import Optional

from adeline.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# The openai SDK and its HTTP stack log every request at INFO
CLIENT_LOGGERS = ("openai", "httpx", "httpcore")


def configure_logging(level: Optional[int] = None, quiet: bool = False) -> None:
    """Install the stderr handler and set the log level.

    A no-op for the handler when the root logger already has one, so
    repeated calls never duplicate output.

    Args:
        level: Log level; defaults to ADELINE_LOG_LEVEL
        quiet: Raise the level to WARNING at least
    """
    if level is None:
        level = get_settings().log_level_int
    if quiet:
        level = max(level, logging.WARNING)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
