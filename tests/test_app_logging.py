"""Tests for logging configuration."""

import logging

from carbon_footprint.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("carbon_footprint")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert not logger.propagate


def test_configure_logging_sets_level() -> None:
    configure_logging("debug")

    assert logging.getLogger("carbon_footprint").level == logging.DEBUG
