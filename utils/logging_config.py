"""Logging setup for the assessment engine.

One root configuration shared by the API process, the config validation
script and the services. Records may carry assessment context through
`extra` (document, instance, module, factor); the formatter appends
whichever of those fields are present so a register or save failure can be
traced back to the document it concerns.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-06
Version: 2.1.0
License: MIT

Example:
    >>> from utils.logging_config import setup_logging, get_logger
    >>> setup_logging()
    >>> logger = get_logger(__name__)
    >>> logger.info("Saved", extra={"document_id": "doc-0001", "module_key": "A2_BUILDING_PROFILE"})
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .config import config


# Extra attributes rendered after the message, in this order
CONTEXT_FIELDS = (
    "document_id",
    "instance_id",
    "module_key",
    "canonical_key",
    "status_code",
    "duration_ms",
    "error_type",
)

QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "multipart": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
}

_logging_configured = False


class ContextFormatter(logging.Formatter):
    """Formatter that appends assessment context as `[key=value ...]`."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = " ".join(
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        )
        return f"{line} [{context}]" if context else line


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    file_output: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    force: bool = False
) -> None:
    """Configure the root logger once per process.

    Console output always goes to stdout; the rotating log file is added
    when `file_output` is set and a log file is configured.

    Args:
        log_level: Level name; defaults to config.LOG_LEVEL.
        log_file: Log file path; defaults to config.LOG_FILE.
        log_format: Format string; defaults to config.LOG_FORMAT.
        file_output: Write to the rotating log file.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept.
        force: Reconfigure even if already configured.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    log_level = (log_level or config.LOG_LEVEL).upper()
    log_file = log_file or config.LOG_FILE
    numeric_level = getattr(logging, log_level, logging.INFO)
    formatter = ContextFormatter(log_format or config.LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]
    if file_output and log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        ))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    _logging_configured = True
    root_logger.info(
        f"Logging configured: level={log_level} file={log_file if file_output else None}"
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; uses Python defaults until setup_logging() runs."""
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, message: str, exc: Exception, **context: Any) -> None:
    """Log an exception with its traceback and assessment context.

    Example:
        >>> log_exception(logger, "Save failed", e, instance_id="abc", module_key="RE_07_NATURAL_HAZARDS")
    """
    context.setdefault("error_type", type(exc).__name__)
    logger.error(f"{message}: {exc}", exc_info=True, extra=context)


# Made with Bob
