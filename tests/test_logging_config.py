"""Tests for the shared logging formatter and helpers.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import logging

from utils.logging_config import ContextFormatter, get_logger, log_exception


def _record(message, **extra):
    record = logging.LogRecord("assessment", logging.ERROR, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_assessment_context():
    formatter = ContextFormatter("%(levelname)s %(message)s")
    record = _record(
        "Recommendation sync failed",
        canonical_key="exposures_flood",
        document_id="doc-0001",
        module_key="RE_07_NATURAL_HAZARDS",
    )

    assert formatter.format(record) == (
        "ERROR Recommendation sync failed "
        "[document_id=doc-0001 module_key=RE_07_NATURAL_HAZARDS canonical_key=exposures_flood]"
    )


def test_formatter_leaves_plain_records_alone():
    formatter = ContextFormatter("%(message)s")

    assert formatter.format(_record("Saved module instance")) == "Saved module instance"


def test_log_exception_carries_context(caplog):
    logger = get_logger("tests.logging")

    try:
        raise ValueError("disk full")
    except ValueError as e:
        log_exception(logger, "Save failed", e, instance_id="inst-1")

    record = caplog.records[-1]
    assert record.getMessage() == "Save failed: disk full"
    assert record.instance_id == "inst-1"
    assert record.error_type == "ValueError"
    assert record.exc_info is not None

# Made with Bob
