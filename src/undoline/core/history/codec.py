"""
Snapshot codec: live values <-> stored snapshots.

Two encodings exist and one engine state uses exactly one of them:

- **raw**: the snapshot is a deep clone of the value (see :mod:`.clone`).
- **compressed**: the snapshot is ASCII text, ``base64(zlib(json(value)))``.

Decoding is tolerant of mixed encodings: anything that is not a ``str`` is
treated as an already-live clone and returned unchanged. That happens when a
value could not be serialized and was stored raw as a fallback.

Failure policy
--------------
Neither direction raises. A value that cannot be serialized exactly is stored as a
raw clone; text that cannot be decoded is returned as-is. Both cases log a
warning, because a wrong-typed undo target is better than a failed undo.
"""

from __future__ import annotations

import base64
import json
import zlib
from typing import Any

from undoline.core.result import Result, attempt
from undoline.core.settings import get_logger, load_settings

from .clone import clone

logger = get_logger(__name__)

Snapshot = Any


def _dumps(value: Any) -> Result[str, Exception]:
    return attempt(lambda: json.dumps(value, ensure_ascii=False, separators=(",", ":")))


def _compress(text: str, level: int) -> str:
    return base64.b64encode(zlib.compress(text.encode("utf-8"), level)).decode("ascii")


def _b64decode(text: str) -> Result[bytes, Exception]:
    return attempt(lambda: base64.b64decode(text.encode("ascii"), validate=True))


def _inflate(blob: bytes) -> Result[str, Exception]:
    return attempt(lambda: zlib.decompress(blob).decode("utf-8"))


def _loads(text: str) -> Result[Any, Exception]:
    return attempt(lambda: json.loads(text))


def encode(value: Any, compressed: bool, *, level: int | None = None) -> Snapshot:
    """Return the stored representation of ``value``.

    Parameters
    ----------
    value : Any
        The live value to store. It is never aliased by the snapshot.
    compressed : bool
        ``True`` selects compressed text, ``False`` a deep clone.
    level : int | None
        zlib level; defaults to ``UNDOLINE_COMPRESSION_LEVEL``.
    """
    if not compressed:
        return clone(value)

    dumped = _dumps(value)
    if dumped.is_err():
        logger.warning(
            "Value of type %s is not JSON serializable (%s); storing a raw clone",
            type(value).__name__,
            dumped.unwrap_err(),
        )
        return clone(value)

    # JSON coerces dict keys to str and tuples to lists; only exact round trips are compressed.
    exact = dumped.flat_map(_loads).flat_map(lambda back: attempt(lambda: bool(back == value)))
    if not exact.get_or(False):
        logger.warning(
            "Value of type %s does not survive a JSON round trip; storing a raw clone",
            type(value).__name__,
        )
        return clone(value)

    lvl = load_settings().compression_level if level is None else level
    return dumped.map(lambda text: _compress(text, lvl)).unwrap()


def decode(stored: Snapshot, compressed: bool) -> Any:
    """Return a live value for ``stored``.

    Non-text snapshots come back unchanged. Compressed text that fails to
    decode is returned as the raw text, with a warning.
    """
    if not isinstance(stored, str) or not compressed:
        return stored

    decoded = _b64decode(stored).flat_map(_inflate).flat_map(_loads)
    if decoded.is_err():
        logger.warning(
            "Malformed compressed snapshot (%s); returning raw text",
            decoded.unwrap_err(),
        )
        return stored
    return decoded.get_or(stored)


__all__ = ["Snapshot", "encode", "decode"]
