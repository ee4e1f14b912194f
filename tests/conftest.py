"""Shared pytest fixtures for the undoline test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from undoline.core.settings import load_settings


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _fresh_settings() -> Iterator[None]:
    """Drop the cached Settings after each test so env tweaks never leak."""
    yield
    load_settings.cache_clear()
