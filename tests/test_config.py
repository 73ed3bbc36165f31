"""Tests for settings and logging setup."""
from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from core import logger as logger_module
from core.config import Settings, settings


def test_preferences_file_follows_data_dir(tmp_path: Path) -> None:
    custom = Settings(data_dir=tmp_path / "data")
    assert custom.preferences_file == tmp_path / "data" / "preferences.json"


def test_default_settings() -> None:
    assert settings.preferences_file.name == "preferences.json"
    assert settings.api_timeout > 0
    assert settings.api_url.startswith("http")


def test_init_logging_adds_handlers_once(tmp_path: Path, monkeypatch) -> None:
    log = logger_module.logger
    saved = list(log.handlers)
    for handler in saved:
        log.removeHandler(handler)
    monkeypatch.setattr(logger_module, "LOG_FILE", tmp_path / "logs" / "tutor.log")
    try:
        logger_module.init_logging()
        logger_module.init_logging()
        assert len(log.handlers) == 2
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in log.handlers)
        assert (tmp_path / "logs").is_dir()
    finally:
        for handler in list(log.handlers):
            handler.close()
            log.removeHandler(handler)
        for handler in saved:
            log.addHandler(handler)
