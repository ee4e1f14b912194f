"""
Deep-clone capability probe.

The clone primitive is detected exactly once, at import time, and cached in
``_PRIMITIVE``. Every later call to :func:`clone` goes straight to the cached
primitive instead of re-checking what is available.

Fallback chain for a single value
---------------------------------
1. The cached primitive (``copy.deepcopy`` when the probe succeeds).
2. A JSON serialize/deserialize round trip.
3. The original reference, with a warning. The caller may then alias state;
   this is accepted as best-effort behavior rather than raised.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from typing import Any, TypeVar

from undoline.core.result import Result, attempt
from undoline.core.settings import get_logger

T = TypeVar("T")

logger = get_logger(__name__)

ClonePrimitive = Callable[[Any], Any]


def json_round_trip(value: T) -> T:
    """Clone ``value`` by serializing it to JSON text and parsing it back."""
    result: T = json.loads(json.dumps(value))
    return result


def probe_clone_primitive() -> tuple[str, ClonePrimitive]:
    """Return ``(name, fn)`` for the best available deep-clone primitive."""
    sample: dict[str, Any] = {"nested": [1, {"k": "v"}], "flag": True}
    probe = attempt(lambda: copy.deepcopy(sample))
    if probe.is_ok() and probe.unwrap() == sample and probe.unwrap() is not sample:
        return "deepcopy", copy.deepcopy
    logger.warning("copy.deepcopy unavailable; cloning via JSON round trip")
    return "json", json_round_trip


_PRIMITIVE_NAME, _PRIMITIVE = probe_clone_primitive()


def primitive_name() -> str:
    """Name of the primitive selected at import time (``deepcopy`` or ``json``)."""
    return _PRIMITIVE_NAME


def try_clone(value: T) -> Result[T, Exception]:
    """Clone ``value`` through the fallback chain, without the final alias step."""
    primary: Result[T, Exception] = attempt(lambda: _PRIMITIVE(value))
    if _PRIMITIVE is json_round_trip:
        return primary
    return primary.or_else(lambda _exc: attempt(lambda: json_round_trip(value)))


def clone(value: T) -> T:
    """Return a deep clone of ``value``; the original reference if cloning fails."""
    result = try_clone(value)
    if result.is_err():
        logger.warning(
            "Could not clone %s (%s); keeping the original reference",
            type(value).__name__,
            result.unwrap_err(),
        )
        return value
    return result.get_or(value)


__all__ = ["clone", "try_clone", "json_round_trip", "primitive_name", "probe_clone_primitive"]
