"""
Unit tests for settings and structlog configuration.
"""

from __future__ import annotations

import pytest
import structlog
from pydantic import ValidationError

from fluent_result import ResultValidationError, StatusCode, create_with_error
from fluent_result.log_config import configure_structlog
from fluent_result.settings import ResultSettings, get_settings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("FLUENT_RESULT_LOG_LEVEL", "FLUENT_RESULT_EXPOSE_MESSAGES"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()


class TestResultSettings:
    def test_defaults(self):
        settings = ResultSettings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.expose_messages is True

    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FLUENT_RESULT_LOG_LEVEL", "debug")
        monkeypatch.setenv("FLUENT_RESULT_EXPOSE_MESSAGES", "false")
        settings = ResultSettings(_env_file=None)
        assert settings.log_level == "DEBUG"
        assert settings.expose_messages is False

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            ResultSettings(_env_file=None, log_level="LOUD")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureStructlog:
    @pytest.fixture(autouse=True)
    def _reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_filters_below_configured_level(self, capsys: pytest.CaptureFixture[str]):
        configure_structlog("WARNING")
        log = structlog.get_logger()
        log.info("hidden.event")
        log.warning("shown.event", key="value")
        out = capsys.readouterr().out
        assert "hidden.event" not in out
        assert "shown.event" in out
        assert "key" in out

    def test_unknown_level_falls_back_to_info(self, capsys: pytest.CaptureFixture[str]):
        configure_structlog("nonsense")
        log = structlog.get_logger()
        log.debug("debug.event")
        log.info("info.event")
        out = capsys.readouterr().out
        assert "debug.event" not in out
        assert "info.event" in out

    def test_library_debug_events_print_with_structlog_defaults(self, capsys: pytest.CaptureFixture[str]):
        structlog.reset_defaults()
        with pytest.raises(ResultValidationError):
            create_with_error(StatusCode.NOT_FOUND, "gone").as_valid_data()
        assert "result.as_valid_data.rejected" in capsys.readouterr().out
