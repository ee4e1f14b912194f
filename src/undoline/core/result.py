"""Typed Result container for the codec's best-effort fallback chains.

Motivation
----------
Snapshot cloning and decoding must never raise into undo/redo: every failure
degrades into a fallback value plus a warning. Modelling each step as a
`Result[T, E]` keeps that chain explicit instead of nesting ``try`` blocks:

- `Ok(value)` / `Err(error)` variants,
- combinators: `map`, `flat_map`, `or_else`,
- helpers: `unwrap`, `unwrap_err`, `get_or`.

Example
-------
>>> from undoline.core.result import ok, err, Result
>>> def half(x: int) -> Result[int, str]:
...     return ok(x // 2) if x % 2 == 0 else err("odd")
>>> ok(8).flat_map(half).flat_map(half).unwrap()
2
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, cast, overload

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    @overload
    def unwrap(self) -> T: ...
    @overload
    def unwrap(self, default: T) -> T: ...

    def unwrap(self, default: T | None = None) -> T:
        """Return the inner value if ``Ok``, else ``default`` or raise ``RuntimeError``."""
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        if default is not None:
            return default
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Apply ``fn`` to the success value; propagate error unchanged."""
        if isinstance(self, Ok):
            return Ok(fn(cast(Ok[T, E], self).value))
        return cast(Result[U, E], self)

    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain steps that already return a :class:`Result`."""
        if isinstance(self, Ok):
            return fn(cast(Ok[T, E], self).value)
        return cast(Result[U, E], self)

    def or_else(self, fallback: Callable[[E], Result[T, E]]) -> Result[T, E]:
        """If ``Err``, call ``fallback(err)``; otherwise return ``self``."""
        if isinstance(self, Err):
            return fallback(cast(Err[T, E], self).error)
        return self

    def get_or(self, default: T) -> T:
        """Return the success value, or ``default`` if ``Err``.

        Unlike :meth:`unwrap`, a ``None`` default is returned as-is.
        """
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        return default

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)


def attempt(fn: Callable[[], T]) -> Result[T, Exception]:
    """Run ``fn`` and capture any ``Exception`` it raises as an ``Err``."""
    try:
        return Ok(fn())
    except Exception as exc:
        return Err(exc)
