"""Engine options contract.

`HistoryOptions` is the validated, caller-supplied configuration of one
engine instance. Defaults for `max_history_size` and `compress_history` come
from :mod:`undoline.core.settings`, so they can be set process-wide through
the environment while explicit values still win.

Notes
-----
- `max_history_size` must be a positive integer or ``None`` (unbounded).
- Callbacks receive ``(previous, current)``; their return value is ignored.
- Unknown keys are rejected so that typos such as ``maxHistory=`` fail loudly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from undoline.core.settings import load_settings

EqualFn = Callable[[Any, Any], bool]
ChangeCallback = Callable[[Any, Any], Any]


def _default_max_size() -> int | None:
    return load_settings().max_history_size


def _default_compress() -> bool:
    return load_settings().compress_history


class HistoryOptions(BaseModel):
    """Validated options for one undo/redo engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_history_size: PositiveInt | None = Field(
        default_factory=_default_max_size,
        description="Cap on past snapshots; oldest are evicted first. None is unbounded.",
    )
    equal_fn: EqualFn | None = Field(
        default=None,
        description="Decides whether a set is a no-op. Defaults to identity-or-equality.",
    )
    compress_history: bool = Field(
        default_factory=_default_compress,
        description="Store snapshots as compressed text instead of deep clones.",
    )
    on_set: ChangeCallback | None = Field(default=None, description="Fires once per committed change")
    on_undo: ChangeCallback | None = Field(default=None, description="Fires once per undo")
    on_redo: ChangeCallback | None = Field(default=None, description="Fires once per redo")


__all__ = ["HistoryOptions", "EqualFn", "ChangeCallback"]
