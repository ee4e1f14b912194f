"""Typed smoke tests for the settings loader.

These tests verify four guarantees:
1) Importing the module-level `settings` yields a `Settings` instance.
2) Environment variables override defaults after clearing the loader cache.
3) History defaults (max size, compression) are read from the environment.
4) `get_logger()` respects the configured UNDOLINE_LOG_LEVEL when constructing loggers.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest
from pydantic import ValidationError

from undoline.core.settings import (
    Settings,
    get_logger,
    load_settings,
    settings,
)


def test_settings_instance_type() -> None:
    """`settings` should be an instance of the typed `Settings` model."""
    assert isinstance(settings, Settings)


def test_env_overrides_with_cache_clear(monkeypatch: Any) -> None:
    """Changing env vars should take effect after `load_settings.cache_clear()`."""
    monkeypatch.setenv("UNDOLINE_LOG_LEVEL", "DEBUG")

    load_settings.cache_clear()
    s = load_settings()

    assert s.log_level == "DEBUG"


def test_log_level_is_case_insensitive(monkeypatch: Any) -> None:
    """Lower-case level names are accepted and normalized."""
    monkeypatch.setenv("UNDOLINE_LOG_LEVEL", "warning")

    load_settings.cache_clear()
    s = load_settings()

    assert s.log_level == "WARNING"
    assert s.log_level_numeric() == logging.WARNING


def test_unprefixed_log_level_is_ignored(monkeypatch: Any) -> None:
    """A host application's own `LOG_LEVEL` does not affect this library."""
    monkeypatch.delenv("UNDOLINE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "info")

    load_settings.cache_clear()
    s = load_settings()

    assert s.log_level == "INFO"
    assert not hasattr(s, "environment")


def test_history_defaults_from_env(monkeypatch: Any) -> None:
    """History defaults map from their UNDOLINE_* variables."""
    monkeypatch.setenv("UNDOLINE_MAX_HISTORY_SIZE", "25")
    monkeypatch.setenv("UNDOLINE_COMPRESS_HISTORY", "true")
    monkeypatch.setenv("UNDOLINE_COMPRESSION_LEVEL", "9")

    load_settings.cache_clear()
    s = load_settings()

    assert s.max_history_size == 25
    assert s.compress_history is True
    assert s.compression_level == 9


def test_history_defaults_unset(monkeypatch: Any) -> None:
    """Without env overrides history is unbounded and uncompressed."""
    monkeypatch.delenv("UNDOLINE_MAX_HISTORY_SIZE", raising=False)
    monkeypatch.delenv("UNDOLINE_COMPRESS_HISTORY", raising=False)

    load_settings.cache_clear()
    s = load_settings()

    assert s.max_history_size is None
    assert s.compress_history is False


def test_invalid_compression_level_rejected(monkeypatch: Any) -> None:
    """zlib only accepts levels 0-9."""
    monkeypatch.setenv("UNDOLINE_COMPRESSION_LEVEL", "12")
    load_settings.cache_clear()
    with pytest.raises(ValidationError):
        load_settings()


def test_get_logger_respects_level(monkeypatch: Any) -> None:
    """`get_logger()` should apply the numeric level derived from `UNDOLINE_LOG_LEVEL`.

    A unique logger name avoids side effects between tests.
    """
    monkeypatch.setenv("UNDOLINE_LOG_LEVEL", "error")
    load_settings.cache_clear()

    logger = get_logger("undoline.tests.settings")

    assert logger.level == logging.ERROR
    assert logger.handlers, "Expected at least one StreamHandler to be attached."
