"""
Basic logging configuration for the application.

``setup_logging`` attaches a console handler to the root logger exactly
once; modules then log through ``logging.getLogger(__name__)``.
"""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger.

    If handlers are already attached (uvicorn, pytest, a second
    ``create_app`` call) only the level is updated.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(numeric_level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # SQL echo is controlled by DEBUG through the engine, not the log level.
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
