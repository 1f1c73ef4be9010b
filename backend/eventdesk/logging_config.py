"""Logging configuration for the application."""

import logging
import os
import sys


def setup_logging(level=None):
    """Configure the root logger once; repeated calls are no-ops."""
    root_logger = logging.getLogger()
    if any(getattr(h, "_eventdesk", False) for h in root_logger.handlers):
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler._eventdesk = True

    root_logger.setLevel(level or os.getenv("LOG_LEVEL", "INFO").upper())
    root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
