"""Console logging configuration tests."""

from __future__ import annotations

import logging

import pytest
from wsdl_flattener.logging_setup import configure_logging


def test_configure_logging_sets_package_level() -> None:
    configure_logging("debug")

    package_logger = logging.getLogger("wsdl_flattener")
    assert package_logger.level == logging.DEBUG
    assert logging.getLogger("wsdl_flattener.document_loading").getEffectiveLevel() == (
        logging.DEBUG
    )

    configure_logging("WARNING")
    assert package_logger.level == logging.WARNING


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unsupported log level"):
        configure_logging("CHATTY")


def test_console_handler_is_attached_when_root_has_none(monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger(), "handlers", [])

    configure_logging("INFO")

    handlers = logging.getLogger("wsdl_flattener").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)


def test_host_root_handler_receives_each_record_once(monkeypatch) -> None:
    records: list[logging.LogRecord] = []

    class _Collector(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    monkeypatch.setattr(logging.getLogger(), "handlers", [_Collector()])

    configure_logging("INFO")
    logging.getLogger("wsdl_flattener.document_loading").info("loaded")

    assert logging.getLogger("wsdl_flattener").handlers == []
    assert [record.getMessage() for record in records] == ["loaded"]
