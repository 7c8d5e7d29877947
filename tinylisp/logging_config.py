"""Logging configuration for the tinylisp driver."""
import logging
import sys
from typing import Optional


def setup_logging(level: str = "WARNING", stream: Optional[object] = None) -> None:
    """
    Configure logging for the command-line driver.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Optional stream for log records. Defaults to stderr so that
            REPL output on stdout stays clean.
    """
    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=stream if stream is not None else sys.stderr,
    )
    logging.getLogger(__name__).debug("Logging initialized at %s level", level.upper())
