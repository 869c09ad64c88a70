"""Tests for logging configuration."""

import logging

from ecoconnect.app_logging import ContextFormatter, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("ecoconnect")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging("DEBUG")
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG


def test_context_formatter_appends_extra_fields() -> None:
    formatter = ContextFormatter("%(levelname)s: %(message)s")
    record = logging.makeLogRecord(
        {
            "levelname": "WARNING",
            "msg": "Geodata lookup failed",
            "category": "ewaste",
            "reason": "ConnectTimeout: timed out",
        }
    )

    assert formatter.format(record) == (
        "WARNING: Geodata lookup failed "
        "[category=ewaste reason=ConnectTimeout: timed out]"
    )


def test_context_formatter_without_extra_fields() -> None:
    formatter = ContextFormatter("%(message)s")
    record = logging.makeLogRecord({"msg": "Item classified"})

    assert formatter.format(record) == "Item classified"
