"""
Logging for grant login.

Messages go to stderr so stdout stays clean for the printed URLs. A log
file is added only when one is configured.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Iterator, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "grant",
    log_file: Optional[str] = None,
    log_level: str = "INFO"
) -> logging.Logger:
    """
    Configure the ``grant`` logger.

    Args:
        name: Logger name
        log_file: Path to an append-mode log file. Falls back to GRANT_LOG_FILE
        log_level: Level name; unknown names read as INFO

    Returns:
        Configured logger instance
    """
    log_file = log_file or os.getenv("GRANT_LOG_FILE")
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


@contextmanager
def timed(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log how long ``operation`` took, or why it failed. Errors propagate."""
    started = time.monotonic()
    logger.debug(f"{operation}: started")
    try:
        yield
    except Exception as e:
        logger.error(
            f"{operation}: {type(e).__name__} after {time.monotonic() - started:.2f}s: {e}"
        )
        raise
    logger.info(f"{operation}: done in {time.monotonic() - started:.2f}s")
