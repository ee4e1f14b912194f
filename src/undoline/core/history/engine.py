"""
Undo/redo engine handle.

This module wires the pieces of the history package into the object callers
actually hold:

- :mod:`.store`    pure set/undo/redo/reset transitions
- :mod:`.batch`    nested transactions over the store
- :mod:`.codec`    snapshot encoding (raw clone or compressed text)
- :mod:`.eviction` bounded ``past``
- :mod:`.view`     lazy ``history.past`` / ``history.future``
- :mod:`.notify`   one callback per logical operation

Concurrency
-----------
All operations are synchronous and run to completion. There is no locking:
an engine is meant to be driven from a single logical thread (one event
handler at a time). Calling ``set``/``undo``/``redo`` from inside the
callback of the same operation is not supported. Nested batching is the only
supported re-entrancy.

Usage
-----
>>> engine = create("initial")
>>> engine.set("state 1")
>>> engine.undo()
>>> engine.value
'initial'
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Generic, TypeVar

from undoline.core.contracts.options import ChangeCallback, HistoryOptions
from undoline.core.settings import get_logger, load_settings

from . import store
from .batch import BatchController
from .notify import Dispatcher, Notification
from .state import HistoryState
from .view import HistoryView, LazyHistory

T = TypeVar("T")
R = TypeVar("R")

logger = get_logger(__name__)

_UNSET: Any = object()


class UndoRedo(Generic[T]):
    """
    In-memory versioned state with multi-level undo/redo and batching.

    Parameters
    ----------
    initial_value : T
        The starting present value. It is cloned on entry.
    options : HistoryOptions | None
        Validated options. Keyword ``overrides`` are merged on top, so
        ``UndoRedo(x, max_history_size=10)`` works without building a model.
    """

    __slots__ = ("_options", "_policy", "_state", "_batch", "_dispatcher")

    def __init__(
        self,
        initial_value: T,
        options: HistoryOptions | None = None,
        **overrides: Any,
    ) -> None:
        if options is None:
            options = HistoryOptions(**overrides)
        elif overrides:
            options = HistoryOptions.model_validate({**dict(options), **overrides})
        self._options = options
        self._policy = store.Policy(
            equal=options.equal_fn or store.default_equal,
            max_size=options.max_history_size,
            level=load_settings().compression_level,
        )
        self._state: HistoryState[T] = store.initial_state(initial_value, options.compress_history)
        self._batch = BatchController()
        self._dispatcher = Dispatcher(options.on_set, options.on_undo, options.on_redo)

    # ------------------------------- Queries --------------------------------

    @property
    def value(self) -> T:
        """The current present value."""
        return self._state.present

    @property
    def state(self) -> HistoryState[T]:
        """The current immutable :class:`HistoryState`."""
        return self._state

    @property
    def options(self) -> HistoryOptions:
        return self._options

    @property
    def can_undo(self) -> bool:
        return self._state.can_undo

    @property
    def can_redo(self) -> bool:
        return self._state.can_redo

    @property
    def is_compressed(self) -> bool:
        return self._state.is_compressed

    @property
    def is_batching(self) -> bool:
        return self._state.is_batching

    @property
    def history(self) -> HistoryView[T]:
        """Lazy ``past`` / ``future`` sequences, decoded on access."""
        compressed = self._state.is_compressed
        return HistoryView(
            past=LazyHistory(self._state.past, compressed),
            future=LazyHistory(self._state.future, compressed),
        )

    # ------------------------------- Operations -----------------------------

    def _install(self, state: HistoryState[T], note: Notification | None) -> None:
        self._state = state
        self._dispatcher.dispatch(note)

    def set(self, value: T) -> None:
        """Make ``value`` the present; a no-op when equal to the current one."""
        new_state, note = store.apply_set(self._state, value, self._policy)
        if new_state is self._state:
            return
        if new_state.is_batching:
            self._batch.record(new_state.present)
        self._install(new_state, note)

    def undo(self) -> None:
        """Move one step back; a no-op when there is no past.

        An open batch is committed first, so its changes become the step
        this undo reverts. In that case ``on_set`` fires for the batch
        before ``on_undo`` fires for the step.
        """
        self._commit_open_batch("undo")
        self._install(*store.apply_undo(self._state, self._policy))

    def redo(self) -> None:
        """Move one step forward; a no-op when there is no future.

        As with :meth:`undo`, an open batch is committed first and its
        ``on_set`` fires before ``on_redo``.
        """
        self._commit_open_batch("redo")
        self._install(*store.apply_redo(self._state, self._policy))

    def reset(self, value: T) -> None:
        """Discard the whole timeline and any open batch; ``value`` becomes present."""
        self._batch.discard()
        self._state = store.apply_reset(value, self._options.compress_history)

    def _commit_open_batch(self, op: str) -> None:
        if not self._batch.active:
            return
        logger.warning("%s() called inside an open batch; committing the batch first", op)
        self._batch.mark_errored()
        self.end_batch()

    # ------------------------------- Batching -------------------------------

    def start_batch(self) -> None:
        """Open a transaction, or nest one level deeper in the open one."""
        self._state = self._batch.start(self._state)

    def end_batch(self) -> None:
        """Close one nesting level; the outermost close commits one history entry.

        If ``equal_fn`` raises while the batch commits, the batch is still
        recorded as a change and the error is re-raised afterwards.
        """
        try:
            new_state, note = self._batch.end(self._state, self._policy)
        finally:
            if not self._batch.active and self._state.is_batching:
                self._state = replace(self._state, is_batching=False)
        error = self._batch.take_error()
        self._install(new_state, note)
        if error is not None:
            raise error

    @contextmanager
    def batch(self) -> Iterator[T]:
        """Context-manager form of :meth:`with_batch`; yields the present value.

        If the body raises, the batch is force-closed (even when nested),
        changes made so far are committed, and the exception propagates.
        """
        self.start_batch()
        try:
            yield self._state.present
        except BaseException:
            self._batch.mark_errored()
            raise
        finally:
            self.end_batch()

    def with_batch(self, fn: Callable[[T], R]) -> R:
        """Run ``fn(present)`` inside a transaction and return its result."""
        with self.batch() as current:
            return fn(current)

    # ------------------------------- Callbacks ------------------------------

    def update_callbacks(
        self,
        *,
        on_set: ChangeCallback | None = _UNSET,
        on_undo: ChangeCallback | None = _UNSET,
        on_redo: ChangeCallback | None = _UNSET,
    ) -> None:
        """Swap callbacks on a live engine. Omitted arguments keep their current value."""
        update: dict[str, Any] = {}
        for name, fn in (("on_set", on_set), ("on_undo", on_undo), ("on_redo", on_redo)):
            if fn is not _UNSET:
                update[name] = fn
                setattr(self._dispatcher, name, fn)
        if update:
            self._options = self._options.model_copy(update=update)

    def __repr__(self) -> str:
        return (
            f"UndoRedo(value={self._state.present!r}, past={len(self._state.past)}, "
            f"future={len(self._state.future)}, batching={self._state.is_batching})"
        )


def create(initial_value: T, options: HistoryOptions | None = None, **overrides: Any) -> UndoRedo[T]:
    """Construct an :class:`UndoRedo` engine around ``initial_value``."""
    return UndoRedo(initial_value, options, **overrides)


__all__ = ["UndoRedo", "create"]
