"""
Notification dispatcher.

Reducers in :mod:`.store` and :mod:`.batch` never call user code directly.
They return a :class:`Notification` describing what happened, and the engine
hands it to :class:`Dispatcher` *after* the new state has been installed.
This keeps each logical operation to exactly one callback: a batch of N
inner ``set`` calls produces one ``set`` notification on commit, never N.

Exceptions raised by a callback propagate to the caller. The state change
they report has already been committed at that point.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

NotificationKind = Literal["set", "undo", "redo"]
Callback = Callable[[Any, Any], Any]


@dataclass(frozen=True, slots=True)
class Notification:
    """One pending ``(previous, current)`` callback invocation."""

    kind: NotificationKind
    previous: Any
    current: Any


class Dispatcher:
    """Map notification kinds to the caller's current callbacks."""

    __slots__ = ("on_set", "on_undo", "on_redo")

    def __init__(
        self,
        on_set: Callback | None = None,
        on_undo: Callback | None = None,
        on_redo: Callback | None = None,
    ) -> None:
        self.on_set = on_set
        self.on_undo = on_undo
        self.on_redo = on_redo

    def callback_for(self, kind: NotificationKind) -> Callback | None:
        if kind == "set":
            return self.on_set
        if kind == "undo":
            return self.on_undo
        return self.on_redo

    def dispatch(self, note: Notification | None) -> None:
        """Invoke the callback registered for ``note.kind``, if any."""
        if note is None:
            return
        fn = self.callback_for(note.kind)
        if fn is not None:
            fn(note.previous, note.current)


__all__ = ["Notification", "NotificationKind", "Callback", "Dispatcher"]
