"""
Logging Configuration
Sets up the package logger for the solver and the command line.

Progress of the relaxation is logged by ``heatedplate.controller.reporting``.
It can be routed to its own stream as bare ``iteration  change`` lines, which
keeps the table readable next to the timestamped diagnostics.
"""
import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "heatedplate"
PROGRESS_LOGGER = "heatedplate.controller.reporting"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    progress_stream: Optional[TextIO] = None,
) -> None:
    """
    Configures the logger for the 'heatedplate' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        progress_stream: If given, progress records are written there
            without timestamps instead of going through the package handlers.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Repeated calls (tests, interactive sessions) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = None
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    progress_logger = logging.getLogger(PROGRESS_LOGGER)
    progress_logger.handlers.clear()
    progress_logger.propagate = progress_stream is None
    if progress_stream is not None:
        progress_handler = logging.StreamHandler(progress_stream)
        progress_handler.setFormatter(logging.Formatter('%(message)s'))
        progress_logger.addHandler(progress_handler)
        # The log file still gets the full record
        if file_handler is not None:
            progress_logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
