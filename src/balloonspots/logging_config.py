"""
Logging Configuration
=====================
One place that wires the 'balloonspots' logger. Modules only ever call
`logging.getLogger(__name__)`; the CLI calls `setup_logging` once at start-up.

Per-frame work (physics steps, repaints) never logs; spot assignments and
shuffles log at DEBUG, lifecycle events (setup, shuffling, black hole, the end)
at INFO.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "balloonspots"

# Time - Module - Level - Message
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Send the demo's log records to stdout and, optionally, to `log_file`.

    Calling it again replaces the handlers instead of stacking them, so a
    restarted window (or a test) never prints each line twice.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        # A fresh file per run
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    target = f", file: {log_file}" if log_file else ""
    logger.info(f"Logging initialized at {logging.getLevelName(level)}{target}.")
    return logger
