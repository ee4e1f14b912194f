"""undoline: in-memory versioned state with undo/redo, batching and compressed history.

Typical use from an application's event handlers:

    from undoline import create

    doc = create({"title": ""}, max_history_size=100)
    doc.set({"title": "Draft"})
    with doc.batch():
        doc.set({"title": "Draft 2"})
        doc.set({"title": "Draft 3"})
    doc.undo()  # back to {"title": "Draft"}
"""

from __future__ import annotations

from undoline.core.contracts.options import HistoryOptions
from undoline.core.history.engine import UndoRedo, create
from undoline.core.history.state import HistoryState
from undoline.core.history.view import HistoryView, LazyHistory

__all__ = [
    "__version__",
    "create",
    "UndoRedo",
    "HistoryOptions",
    "HistoryState",
    "HistoryView",
    "LazyHistory",
]
__version__ = "0.1.0"
