"""Tests for logging helpers."""

import logging

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer

from period_overview import logger as logger_module


def test_select_renderer_uses_console_in_debug(monkeypatch) -> None:
    monkeypatch.setattr(logger_module.settings, "debug", True)
    renderer = logger_module._select_renderer()
    assert isinstance(renderer, ConsoleRenderer)


def test_select_renderer_uses_json_in_production(monkeypatch) -> None:
    monkeypatch.setattr(logger_module.settings, "debug", False)
    renderer = logger_module._select_renderer()
    assert isinstance(renderer, JSONRenderer)


def test_configure_logging_wires_structlog(monkeypatch) -> None:
    calls: dict[str, object] = {}
    monkeypatch.setattr(structlog, "configure", lambda **kwargs: calls.update(kwargs))
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(basic=kwargs))
    monkeypatch.setattr(logger_module.settings, "debug", False)

    logger_module.configure_logging()

    assert calls["processors"][-1] is structlog.stdlib.ProcessorFormatter.wrap_for_formatter
    assert calls["basic"]["level"] == logging.INFO


def test_log_timing_reports_duration_and_context(caplog) -> None:
    log = logger_module.get_logger("tests.timing")

    with logger_module.log_timing("period_overview", logger=log, scope="account:1") as timing:
        timing["periods"] = 3

    assert timing["duration_ms"] >= 0
    assert "period_overview completed" in caplog.text
    assert "account:1" in caplog.text
    assert "'periods': 3" in caplog.text


def test_log_timing_logs_even_on_error(caplog) -> None:
    log = logger_module.get_logger("tests.timing")

    try:
        with logger_module.log_timing("failing_operation", logger=log):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert "failing_operation completed" in caplog.text


def test_log_exception_without_traceback(caplog) -> None:
    log = logger_module.get_logger("tests.exceptions")

    logger_module.log_exception(
        log,
        LookupError("Currency 'XYZ' not found"),
        "Could not find currency",
        level="warning",
        include_traceback=False,
        code="XYZ",
    )

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "LookupError" in caplog.text
    assert "'code': 'XYZ'" in caplog.text
