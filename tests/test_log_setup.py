"""Tests for wiz.server.log_setup — the ``wiz`` logger hook."""

import logging

import pytest

from wiz.server.log_setup import configure_logging


@pytest.fixture
def wiz_logger():
    logger = logging.getLogger("wiz")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


class TestConfigureLogging:
    def test_replaces_existing_handlers(self, wiz_logger) -> None:
        old, new = logging.NullHandler(), logging.NullHandler()
        wiz_logger.addHandler(old)

        configure_logging("info", [new])

        assert wiz_logger.handlers == [new]

    def test_no_handlers_clears(self, wiz_logger) -> None:
        wiz_logger.addHandler(logging.NullHandler())

        configure_logging("warning")

        assert wiz_logger.handlers == []
        assert wiz_logger.level == logging.WARNING

    def test_level_is_case_insensitive(self, wiz_logger) -> None:
        assert configure_logging("DeBuG").level == logging.DEBUG

    def test_child_loggers_reach_handler(self, wiz_logger) -> None:
        records: list[logging.LogRecord] = []

        class Collect(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        configure_logging("debug", [Collect()])
        logging.getLogger("wiz.static").debug("served %s", "style.css")

        assert [r.getMessage() for r in records] == ["served style.css"]
