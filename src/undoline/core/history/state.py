"""
History state records.

``HistoryState`` is the atomic, externally observable unit of the engine.
It is frozen: every operation builds a new instance with
:func:`dataclasses.replace` and the engine swaps it in wholesale.

``BatchContext`` is the private bookkeeping for an open transaction. It is
mutable, scoped to a single engine instance, and never part of
``HistoryState``.

Design Notes
------------
- ``is_compressed`` is fixed when a state is built (construction or reset),
  so every snapshot in ``past``/``future`` decodes the same way.
- ``past`` is oldest-first; ``future`` is nearest-redo-first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HistoryState(Generic[T]):
    """
    Immutable snapshot triple plus encoding and batching flags.

    Attributes
    ----------
    present : T
        The live current value, always materialized.
    past : tuple[Any, ...]
        Stored snapshots, oldest first. ``past[-1]`` is the next undo target.
    future : tuple[Any, ...]
        Stored snapshots, nearest first. ``future[0]`` is the next redo target.
    is_compressed : bool
        Whether snapshots in this state use the compressed-text encoding.
    is_batching : bool
        Whether a transaction is currently open.
    """

    present: T
    past: tuple[Any, ...] = ()
    future: tuple[Any, ...] = ()
    is_compressed: bool = False
    is_batching: bool = False

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0


@dataclass(slots=True)
class BatchContext(Generic[T]):
    """Bookkeeping for one open (possibly nested) transaction."""

    initial: T
    last: T
    depth: int = 1
    errored: bool = False
    # Number of inner `set` calls absorbed; only used for debug logging.
    absorbed: int = 0


__all__ = ["HistoryState", "BatchContext"]
