"""Logging setup shared by the CLI and the API"""

import logging
import sys


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the `mdposts` logger and set its level."""
    logger = logging.getLogger("mdposts")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
