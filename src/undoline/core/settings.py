"""Centralized library configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the working directory root: .env, .env.local

The history defaults defined here are only *defaults*: options passed
explicitly to an engine always win over the environment.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed library configuration loaded from env and `.env` files.

    Attributes
    ----------
    log_level : LogLevelName
        Log level for the library's loggers; maps from `UNDOLINE_LOG_LEVEL`
        (case-insensitive).
    max_history_size : Optional[int]
        Default cap on the number of past snapshots; maps from
        `UNDOLINE_MAX_HISTORY_SIZE`. ``None`` means unbounded.
    compress_history : bool
        Default snapshot encoding; maps from `UNDOLINE_COMPRESS_HISTORY`.
    compression_level : int
        zlib level (0-9) used for compressed snapshots; maps from
        `UNDOLINE_COMPRESSION_LEVEL`.
    """

    log_level: LogLevelName = Field(default="INFO", alias="UNDOLINE_LOG_LEVEL")
    max_history_size: PositiveInt | None = Field(default=None, alias="UNDOLINE_MAX_HISTORY_SIZE")
    compress_history: bool = Field(default=False, alias="UNDOLINE_COMPRESS_HISTORY")
    compression_level: int = Field(default=6, ge=0, le=9, alias="UNDOLINE_COMPRESSION_LEVEL")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "undoline") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
