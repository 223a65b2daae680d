"""Unit tests for logging configuration and formatters."""
from __future__ import annotations

import json
import logging
import sys
from unittest.mock import patch

import pytest

from gramps.core.settings import LoggingSettings
from gramps.infra.logging import JSONFormatter, build_logging_config, setup_logging


def make_record(msg: str = "Loaded %s", *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="gramps.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJSONFormatter:
    """Test suite for JSONFormatter."""

    def test_basic_fields(self):
        payload = json.loads(JSONFormatter().format(make_record("Loaded %s", "xkcd")))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "gramps.test"
        assert payload["message"] == "Loaded xkcd"
        assert payload["timestamp"].endswith("Z")
        assert "trace_id" not in payload

    def test_static_and_extra_fields(self):
        formatter = JSONFormatter(static={"service": "gramps"})

        payload = json.loads(formatter.format(make_record("x", namespace="XKCD")))

        assert payload["service"] == "gramps"
        assert payload["namespace"] == "XKCD"

    def test_exception_on_one_line(self):
        try:
            raise ValueError("bad source")
        except ValueError:
            record = make_record("failed")
            record.exc_info = sys.exc_info()

        line = JSONFormatter().format(record)

        assert "\n" not in line
        assert "ValueError: bad source" in json.loads(line)["exception"]


@pytest.mark.unit
class TestBuildLoggingConfig:
    """Test suite for build_logging_config."""

    def test_text_console(self):
        config = build_logging_config("debug", json_logs=False, console_enabled=True, service_name="svc")

        assert config["root"] == {"level": "DEBUG", "handlers": ["console"]}
        assert config["handlers"]["console"]["formatter"] == "text"
        assert config["disable_existing_loggers"] is False

    def test_json_console(self):
        config = build_logging_config("INFO", json_logs=True, console_enabled=True, service_name="svc")

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["formatters"]["json"]["static"] == {"service": "svc"}

    def test_console_disabled(self):
        config = build_logging_config("INFO", json_logs=False, console_enabled=False, service_name="svc")

        assert config["handlers"] == {}
        assert config["root"]["handlers"] == []

    def test_uvicorn_propagates(self):
        config = build_logging_config("INFO", json_logs=False, console_enabled=True, service_name="svc")

        assert config["loggers"]["uvicorn"] == {"handlers": [], "propagate": True}


@pytest.mark.unit
class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_runs_once(self):
        """conftest already configured logging; later calls are no-ops."""
        with patch("gramps.infra.logging.config.configure_logging") as configure:
            setup_logging()

        configure.assert_not_called()

    def test_force_applies_settings_and_overrides(self):
        settings = LoggingSettings(level="WARNING", json_logs=True)

        with patch("gramps.infra.logging.config.configure_logging") as configure:
            setup_logging(settings, force=True, console_enabled=False)

        kwargs = configure.call_args.kwargs
        assert kwargs["log_level"] == "WARNING"
        assert kwargs["json_logs"] is True
        assert kwargs["console_enabled"] is False
