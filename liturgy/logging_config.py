"""
Logging setup for the command-line entry points.

Library modules only create loggers with logging.getLogger(__name__);
setup_logging() attaches handlers to the root logger, once.
"""

import logging
from typing import Optional

from liturgy.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL, logfile: Optional[str] = None) -> None:
    """Configure the root logger with a console handler and optional file handler.

    Does nothing if the root logger already has handlers (e.g. under pytest).
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
