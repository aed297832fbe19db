import io
import logging

from transaction_analyzer import logging_setup
from transaction_analyzer.logging_setup import _parse_level, get_logger


def test_parse_level_accepts_names_and_numbers(monkeypatch):
    monkeypatch.delenv("TRANSACTION_ANALYZER_LOG_LEVEL", raising=False)

    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level("30") == 30
    assert _parse_level(logging.ERROR) == logging.ERROR
    assert _parse_level(None) == logging.INFO


def test_parse_level_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("TRANSACTION_ANALYZER_LOG_LEVEL", "warning")
    assert _parse_level(None) == logging.WARNING
    assert _parse_level("bogus") == logging.WARNING

    monkeypatch.setenv("TRANSACTION_ANALYZER_LOG_LEVEL", "bogus")
    assert _parse_level(None) == logging.INFO


def test_get_logger_returns_named_logger():
    logger = get_logger("transaction_analyzer.loader")

    assert logger.name == "transaction_analyzer.loader"
    assert logging.getLogger("transaction_analyzer").handlers


def test_configure_logging_applies_a_new_level_on_later_calls(monkeypatch):
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    pkg_logger = logging.getLogger("transaction_analyzer")
    saved_handlers = list(pkg_logger.handlers)
    saved_level = pkg_logger.level
    saved_propagate = pkg_logger.propagate
    stream = io.StringIO()
    try:
        logging_setup.configure_logging("WARNING", stream=stream)
        logging_setup.configure_logging("DEBUG")

        stream_handlers = [h for h in pkg_logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].level == logging.DEBUG
        assert pkg_logger.level == logging.DEBUG

        logging_setup.configure_logging()
        assert pkg_logger.level == logging.DEBUG

        get_logger("transaction_analyzer.loader").debug("loaded")
        assert "loaded" in stream.getvalue()
    finally:
        pkg_logger.handlers = saved_handlers
        pkg_logger.setLevel(saved_level)
        pkg_logger.propagate = saved_propagate
