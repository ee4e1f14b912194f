"""
History store: pure state transitions for set / undo / redo / reset.

Every function here takes the prior :class:`HistoryState` plus an input and
returns ``(new_state, notification)``. Nothing is mutated and no callback is
run; the engine installs the new state and then dispatches the notification.
A no-op returns the *same* state object and ``None``.

Ordering guarantees
-------------------
- ``past[-1]`` is always the immediate undo target.
- ``future[0]`` is always the immediate redo target.
- A ``set`` that changes the value clears ``future``: the timeline is linear.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, TypeVar

from . import codec
from .clone import clone
from .eviction import evict
from .notify import Notification
from .state import HistoryState

T = TypeVar("T")

Transition = tuple[HistoryState[T], Notification | None]


def default_equal(a: Any, b: Any) -> bool:
    """Identity first, then value equality."""
    return a is b or bool(a == b)


@dataclass(frozen=True, slots=True)
class Policy:
    """Per-engine inputs the reducers need besides the state itself."""

    equal: Callable[[Any, Any], bool] = default_equal
    max_size: int | None = None
    level: int | None = None

    def encode(self, value: Any, compressed: bool) -> Any:
        return codec.encode(value, compressed, level=self.level)

    def push_past(self, state: HistoryState[Any], snapshot: Any) -> tuple[Any, ...]:
        """Append ``snapshot`` to ``state.past`` and apply eviction."""
        return evict(state.past + (snapshot,), self.max_size)


def initial_state(value: T, compressed: bool) -> HistoryState[T]:
    """Build a fresh state with an empty timeline around a clone of ``value``."""
    return HistoryState(present=clone(value), is_compressed=compressed)


def apply_set(state: HistoryState[T], value: T, policy: Policy) -> Transition[T]:
    """Make ``value`` the present.

    Outside a batch the old present is pushed onto ``past``. Inside a batch
    only ``present`` and ``future`` change; recording is deferred to commit.
    """
    if policy.equal(state.present, value):
        return state, None

    nxt = clone(value)
    if state.is_batching:
        return replace(state, present=nxt, future=()), None

    past = policy.push_past(state, policy.encode(state.present, state.is_compressed))
    new_state = replace(state, past=past, present=nxt, future=())
    return new_state, Notification("set", state.present, nxt)


def apply_undo(state: HistoryState[T], policy: Policy) -> Transition[T]:
    """Step one entry back; no-op when ``past`` is empty."""
    if not state.past:
        return state, None

    previous = codec.decode(state.past[-1], state.is_compressed)
    future = (policy.encode(state.present, state.is_compressed),) + state.future
    new_state = replace(
        state,
        past=state.past[:-1],
        present=previous,
        future=future,
        is_batching=False,
    )
    return new_state, Notification("undo", state.present, previous)


def apply_redo(state: HistoryState[T], policy: Policy) -> Transition[T]:
    """Step one entry forward; no-op when ``future`` is empty."""
    if not state.future:
        return state, None

    nxt = codec.decode(state.future[0], state.is_compressed)
    past = policy.push_past(state, policy.encode(state.present, state.is_compressed))
    new_state = replace(
        state,
        past=past,
        present=nxt,
        future=state.future[1:],
        is_batching=False,
    )
    return new_state, Notification("redo", state.present, nxt)


def apply_reset(value: T, compressed: bool) -> HistoryState[T]:
    """Replace the whole timeline with a single present value."""
    return initial_state(value, compressed)


__all__ = [
    "Policy",
    "Transition",
    "default_equal",
    "initial_state",
    "apply_set",
    "apply_undo",
    "apply_redo",
    "apply_reset",
]
