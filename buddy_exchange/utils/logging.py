"""Logging setup for command-line use."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send buddy_exchange log records to stderr.

    Args:
        verbose: Log DEBUG records instead of WARNING and above
    """
    logger = logging.getLogger("buddy_exchange")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(getattr(h, "_buddy_exchange", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._buddy_exchange = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
