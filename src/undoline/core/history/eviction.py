"""Bounded-history eviction: drop the oldest past snapshots beyond a cap."""

from __future__ import annotations

from typing import TypeVar

S = TypeVar("S")


def evict(past: tuple[S, ...], max_size: int | None) -> tuple[S, ...]:
    """Return ``past`` trimmed from the front to at most ``max_size`` entries.

    ``None`` means unbounded. Only ``past`` is ever capped; ``future`` is
    bounded by what ``past`` held before the undos that produced it.
    """
    if max_size is None or len(past) <= max_size:
        return past
    return past[len(past) - max_size :]


__all__ = ["evict"]
