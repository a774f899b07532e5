"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging

import structlog

from autotrade.config.schema import LoggingConfig
from autotrade.engine import TradingEngine
from autotrade.logging import configure_logging, get_logger, setup_logging


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.strip().splitlines() if line.strip()]


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_json")
        logger.info("test message", strategy_id="s1")

        line = _json_lines(capsys.readouterr().err)[-1]
        assert line["event"] == "test message"
        assert line["strategy_id"] == "s1"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_console_format(self, capsys):
        setup_logging(level="INFO", log_format="console")
        logger = get_logger("test_console")
        logger.info("hello console", code="X")

        captured = capsys.readouterr()
        assert "hello console" in captured.err
        assert "X" in captured.err

    def test_log_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")
        logger = get_logger("test_level")
        logger.info("should be hidden")
        logger.warning("should appear")

        captured = capsys.readouterr()
        assert "should be hidden" not in captured.err
        assert "should appear" in captured.err

    def test_get_logger_with_context(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_ctx", strategy_id="s2", code="Y")
        logger.info("context test")

        line = _json_lines(capsys.readouterr().err)[-1]
        assert line["strategy_id"] == "s2"
        assert line["code"] == "Y"

    def test_contextvars_binding(self, capsys):
        setup_logging(level="INFO", log_format="json")
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id="abc123")

        logger = get_logger("test_ctxvars")
        logger.info("with context var")

        line = _json_lines(capsys.readouterr().err)[-1]
        assert line["request_id"] == "abc123"

        structlog.contextvars.clear_contextvars()

    def test_stdlib_logs_rendered(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logging.getLogger("uvicorn.error").info("server started")

        line = _json_lines(capsys.readouterr().err)[-1]
        assert line["event"] == "server started"
        assert line["logger"] == "uvicorn.error"

    def test_configure_from_config(self, capsys):
        configure_logging(LoggingConfig(level="ERROR", format="json"))
        get_logger("test_cfg").warning("quiet")
        assert "quiet" not in capsys.readouterr().err


class TestEngineEvents:
    def test_execution_is_logged(self, capsys, strategy, candidate):
        setup_logging(level="INFO", log_format="json")
        engine = TradingEngine()
        signal = engine.generate_signals(strategy, [candidate])[0]
        engine.execute_signal(signal.id)
        engine.execute_signal(signal.id)

        events = [line["event"] for line in _json_lines(capsys.readouterr().err)]
        assert "signals_generated" in events
        assert "portfolio_created" in events
        assert "order_filled" in events
        assert "signal_not_found" in events
