"""Tests for runtime settings and logging setup."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from create_poly_app.config.log_setup import PACKAGE_LOGGER, configure_logging
from create_poly_app.config.settings import ExecutionSettings, LoggingSettings


class TestExecutionSettings:
    def test_defaults(self) -> None:
        settings = ExecutionSettings()
        assert settings.script_timeout_seconds == 600.0
        assert settings.shell_executable is None
        assert settings.use_catalog is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CPA_SCRIPT_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("CPA_USE_CATALOG", "true")
        settings = ExecutionSettings()
        assert settings.script_timeout_seconds == 30.0
        assert settings.use_catalog is True

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ExecutionSettings(script_timeout_seconds=0)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_to_file_under_base_dir(self, tmp_path: Path) -> None:
        logger = configure_logging(LoggingSettings(level="DEBUG", file=True, console=False), tmp_path)
        logging.getLogger("create_poly_app.pipeline.executor").debug("stage started")
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / "create-poly-app.log").read_text(encoding="utf-8")
        assert "session" in content
        assert "[DEBUG] create_poly_app.pipeline.executor: stage started" in content

    def test_reconfiguring_does_not_stack_handlers(self, tmp_path: Path) -> None:
        settings = LoggingSettings(file=True, console=True)
        configure_logging(settings, tmp_path)
        logger = configure_logging(settings, tmp_path)
        assert len(logger.handlers) == 2
        assert logger.propagate is False

    def test_no_sinks(self, tmp_path: Path) -> None:
        logger = configure_logging(LoggingSettings(file=False, console=False), tmp_path)
        assert [type(h) for h in logger.handlers] == [logging.NullHandler]
        assert not (tmp_path / "create-poly-app.log").exists()

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logger = configure_logging(LoggingSettings(file=False), tmp_path)
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.WARNING
