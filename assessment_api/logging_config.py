"""Logging entry point for the assessment API process.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-09
Version: 2.1.0
License: MIT
"""

import logging

from utils.logging_config import setup_logging as setup_base_logging


def setup_logging(name) -> logging.Logger:
    """Configure process logging from the environment and return a logger.

    Request records carry `status_code` and `duration_ms`, which the shared
    formatter appends to each line.
    """
    setup_base_logging()
    return logging.getLogger(name)

# Made with Bob
