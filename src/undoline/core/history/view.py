"""
Lazy, read-only projections of the stored timeline.

``engine.history.past`` and ``engine.history.future`` are :class:`LazyHistory`
sequences. They hold the stored snapshots and decode an element only when it
is read, so a long compressed history is not inflated unless the caller
actually enumerates it.

Cost model
----------
- ``len(view)``: no decoding.
- ``view[i]``: one ``decode``.
- ``iter(view)``: one ``decode`` per element actually consumed.
- ``view[a:b]``: no decoding; returns another lazy view.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, overload

from . import codec

T = TypeVar("T")


class LazyHistory(Sequence[T]):
    """Immutable sequence that decodes stored snapshots on access."""

    __slots__ = ("_items", "_compressed")

    def __init__(self, items: tuple[Any, ...], compressed: bool) -> None:
        self._items = items
        self._compressed = compressed

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...
    @overload
    def __getitem__(self, index: slice) -> LazyHistory[T]: ...

    def __getitem__(self, index: int | slice) -> T | LazyHistory[T]:
        if isinstance(index, slice):
            return LazyHistory(self._items[index], self._compressed)
        value: T = codec.decode(self._items[index], self._compressed)
        return value

    def __iter__(self) -> Iterator[T]:
        for item in self._items:
            yield codec.decode(item, self._compressed)

    def __reversed__(self) -> Iterator[T]:
        for item in reversed(self._items):
            yield codec.decode(item, self._compressed)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LazyHistory | list | tuple):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other, strict=True))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_list(self) -> list[T]:
        """Decode every element into a new list."""
        return list(self)

    def __repr__(self) -> str:
        return f"LazyHistory(len={len(self._items)}, compressed={self._compressed})"


@dataclass(frozen=True, slots=True)
class HistoryView(Generic[T]):
    """The caller-facing pair of lazy ``past`` / ``future`` sequences."""

    past: LazyHistory[T]
    future: LazyHistory[T]


__all__ = ["LazyHistory", "HistoryView"]
