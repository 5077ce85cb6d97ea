"""Logging configuration for codequeue.

Log output is opt-in: nothing is emitted unless ``-v`` or ``--log-file`` is
given. All modules log through children of the ``codequeue`` logger.
"""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "codequeue"
LOG_FORMAT = "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that repeat what the API clients already log
NOISY_LOGGERS = ("httpx", "httpcore")


def level_for(verbose: int) -> int:
    """Map a -v count to a logging level."""
    return logging.DEBUG if verbose >= 2 else logging.INFO


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure logging based on verbosity level and optional file output.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
    """
    if verbose == 0 and log_file is None:
        return

    level = level_for(verbose)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if verbose > 0:
        _attach(logger, logging.StreamHandler(sys.stderr), level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file), level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    started = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("codequeue run started at %s (level=%s)", started, logging.getLevelName(level))
