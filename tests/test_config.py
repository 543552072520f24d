"""
Test suite for configuration and logging setup
"""

import io
import json
import logging

import pytest
from pydantic import ValidationError

from payments_ledger.config import LedgerConfig, get_config, reload_config
from payments_ledger.logging_config import (
    JSONFormatter, LOGGER_NAME, get_logger, log_action, setup_logging
)


class TestLedgerConfig:
    """Test environment-based configuration"""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "LOG_FORMAT", "LOG_FILE", "SORT_OUTPUT"):
            monkeypatch.delenv(f"PAYMENTS_LEDGER_{name}", raising=False)
        config = LedgerConfig(_env_file=None)

        assert config.log_level == "WARNING"
        assert config.log_format == "text"
        assert config.log_file is None
        assert config.sort_output is True

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_LEDGER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PAYMENTS_LEDGER_SORT_OUTPUT", "false")
        config = LedgerConfig(_env_file=None)

        assert config.log_level == "DEBUG"
        assert config.sort_output is False

    def test_reload_config(self, monkeypatch):
        original = get_config()
        monkeypatch.setenv("PAYMENTS_LEDGER_LOG_FORMAT", "json")
        try:
            assert reload_config().log_format == "json"
            assert get_config().log_format == "json"
        finally:
            monkeypatch.delenv("PAYMENTS_LEDGER_LOG_FORMAT")
            reload_config()
        assert get_config() is not original


class TestLogging:
    """Test diagnostics logging setup"""

    def test_text_output(self):
        stream = io.StringIO()
        logger = setup_logging(level="WARNING", stream=stream)
        get_logger(f"{LOGGER_NAME}.ledger").warning("held funds short")

        assert logger.propagate is False
        assert stream.getvalue() == f"WARNING {LOGGER_NAME}.ledger: held funds short\n"

    def test_level_filters(self):
        stream = io.StringIO()
        setup_logging(level="ERROR", stream=stream)
        get_logger(f"{LOGGER_NAME}.ledger").warning("not shown")

        assert stream.getvalue() == ""

    def test_setup_replaces_handlers(self):
        setup_logging(stream=io.StringIO())
        logger = setup_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        path = tmp_path / "ledger.log"
        logger = setup_logging(level="INFO", log_file=str(path))
        logger.info("written to file")
        logger.handlers[0].flush()

        assert "written to file" in path.read_text()

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported log format"):
            setup_logging(fmt="xml")

    def test_json_log_action(self):
        stream = io.StringIO()
        setup_logging(fmt="json", stream=stream)
        log_action(
            get_logger(f"{LOGGER_NAME}.ledger"), "warning", "rejected",
            action="withdraw", client=4, tx=12, sequence=3
        )

        entry = json.loads(stream.getvalue())
        assert entry["message"] == "rejected"
        assert entry["level"] == "WARNING"
        assert entry["action"] == "withdraw"
        assert entry["client"] == 4
        assert entry["tx"] == 12
        assert entry["sequence"] == 3
        assert "timestamp" in entry

    def test_json_formatter_drops_missing_fields(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "plain", (), None)
        entry = json.loads(JSONFormatter().format(record))

        assert "client" not in entry
        assert entry["message"] == "plain"

    def test_log_action_without_handlers_reaches_caplog(self, caplog):
        log_action(get_logger(f"{LOGGER_NAME}.ledger"), "warning", "seen", client=1)

        assert caplog.records[-1].getMessage() == "seen"
        assert caplog.records[-1].client == 1


class TestLedgerConfigValidation:
    """Test that invalid settings are rejected up front"""

    def test_level_and_format_normalized(self):
        config = LedgerConfig(_env_file=None, log_level="info", log_format="JSON")

        assert config.log_level == "INFO"
        assert config.log_format == "json"

    @pytest.mark.parametrize("field,value", [
        ("log_level", "verbose"),
        ("log_format", "xml"),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            LedgerConfig(_env_file=None, **{field: value})

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_LEDGER_LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            LedgerConfig(_env_file=None)
