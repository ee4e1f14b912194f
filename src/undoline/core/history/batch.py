"""
Batch controller: nested transactions that collapse into one history entry.

State machine
-------------
``Idle --start--> Open(1)``
``Open(n) --start--> Open(n+1)``
``Open(n>1) --end--> Open(n-1)``
``Open(1) --end--> Committing --> Idle``
``Open(n) --end(errored)--> Committing --> Idle`` regardless of ``n``

While a batch is open, ``set`` only replaces ``present`` (see
:func:`.store.apply_set`) and the controller remembers the latest value.
On commit, the value captured when the outermost batch opened is pushed to
``past`` once and a single ``set`` notification ``(initial, last)`` is
emitted. A batch whose final value equals its baseline records nothing.

An errored batch still commits: partial progress made before the error is
kept and undoable.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from undoline.core.result import attempt
from undoline.core.settings import get_logger

from . import codec
from .clone import clone
from .notify import Notification
from .state import BatchContext, HistoryState
from .store import Policy, Transition

logger = get_logger(__name__)


class BatchController:
    """Per-engine owner of the private :class:`BatchContext`."""

    __slots__ = ("_ctx", "_error")

    def __init__(self) -> None:
        self._ctx: BatchContext[Any] | None = None
        self._error: Exception | None = None

    @property
    def active(self) -> bool:
        return self._ctx is not None

    @property
    def depth(self) -> int:
        return self._ctx.depth if self._ctx is not None else 0

    def start(self, state: HistoryState[Any]) -> HistoryState[Any]:
        """Open a batch, or nest one level deeper inside the open one."""
        if self._ctx is None:
            self._ctx = BatchContext(initial=clone(state.present), last=state.present)
        else:
            self._ctx.depth += 1
        return state if state.is_batching else replace(state, is_batching=True)

    def record(self, value: Any) -> None:
        """Remember ``value`` as the most recent value seen inside the batch."""
        if self._ctx is not None:
            self._ctx.last = value
            self._ctx.absorbed += 1

    def mark_errored(self) -> None:
        """Force the next :meth:`end` to close the batch at any depth."""
        if self._ctx is not None:
            self._ctx.errored = True

    def discard(self) -> bool:
        """Drop the open batch without committing; return whether one was open."""
        was_open = self._ctx is not None
        self._ctx = None
        return was_open

    def end(self, state: HistoryState[Any], policy: Policy) -> Transition[Any]:
        """Close one nesting level; commit when the outermost level closes."""
        ctx = self._ctx
        if ctx is None:
            logger.debug("end_batch() without an open batch; ignoring")
            return state, None

        ctx.depth -= 1
        if ctx.depth > 0 and not ctx.errored:
            return state, None
        if ctx.depth > 0:
            logger.debug("Force-closing errored batch at depth %d", ctx.depth)

        self._ctx = None
        return self._commit(replace(state, is_batching=False), ctx, policy)

    def take_error(self) -> Exception | None:
        """Return and clear the ``equal_fn`` error raised by the last commit, if any."""
        error, self._error = self._error, None
        return error

    def _commit(
        self,
        state: HistoryState[Any],
        ctx: BatchContext[Any],
        policy: Policy,
    ) -> Transition[Any]:
        unchanged = attempt(lambda: bool(policy.equal(state.present, ctx.initial)))
        if unchanged.is_err():
            # The baseline is still recorded so the batch stays undoable.
            self._error = unchanged.unwrap_err()
            logger.warning(
                "equal_fn raised while committing a batch (%s); recording it as a change",
                self._error,
            )
        elif unchanged.unwrap():
            logger.debug("Batch of %d set(s) ended on its baseline; nothing recorded", ctx.absorbed)
            return state, None

        past = state.past
        on_top = bool(past) and attempt(
            lambda: bool(policy.equal(codec.decode(past[-1], state.is_compressed), ctx.initial))
        ).get_or(False)
        if not on_top:
            past = policy.push_past(state, policy.encode(ctx.initial, state.is_compressed))

        committed = replace(state, past=past, future=())
        return committed, Notification("set", ctx.initial, ctx.last)


__all__ = ["BatchController"]
