"""Unit tests for infrastructure.logging.setup."""

import json

import pytest
import structlog

from infrastructure.configuration import Settings
from infrastructure.logging.setup import build_processors, get_logger, get_module_logger


def _render(chain, event):
    for processor in chain:
        event = processor(None, "info", event)
    return event


@pytest.mark.unit
class TestBuildProcessors:
    def test_json_entries_carry_service_info_from_settings(self):
        settings = Settings(PREFIX="dev-", PROJECT_NAME="school-content-api", GIT_SHA="abc123")

        line = _render(
            build_processors(settings, json_output=True),
            {"event": "startup", "smtp_password": "hunter2"},
        )

        entry = json.loads(line)
        assert entry["event"] == "startup"
        assert entry["level"] == "info"
        assert entry["service"] == "school-content-api"
        assert entry["version"] == "abc123"
        assert entry["environment"] == "dev"
        assert entry["smtp_password"] == "***REDACTED***"
        assert "timestamp" in entry

    @pytest.mark.parametrize(
        "json_output, renderer",
        [(True, structlog.processors.JSONRenderer), (False, structlog.dev.ConsoleRenderer)],
    )
    def test_renderer(self, json_output, renderer):
        assert isinstance(build_processors(Settings(), json_output)[-1], renderer)


@pytest.mark.unit
class TestLoggers:
    def test_module_logger_is_bound_to_the_calling_module(self):
        context = structlog.get_context(get_module_logger())

        assert context["module_path"].endswith("test_logging_setup")
        assert context["component"] == "test_logging_setup"

    def test_named_logger(self):
        assert structlog.get_context(get_logger("mailer"))["logger_name"] == "mailer"
        assert structlog.get_context(get_logger())["logger_name"].endswith("test_logging_setup")
