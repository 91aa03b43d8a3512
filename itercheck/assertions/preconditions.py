"""Argument checks shared by the assertion engines."""

from __future__ import annotations

from collections.abc import Iterable, Sized
from typing import Any

from .errors import PreconditionError


def require_actual(actual: Iterable[Any] | None) -> list[Any]:
    """
    Materialize the collection under test.

    The caller's object is never mutated; generators are consumed once.

    Raises:
        PreconditionError: If actual is None or not iterable
    """
    if actual is None:
        raise PreconditionError("Expecting actual not to be None")
    return _as_list(actual, "actual")


def require_values(values: Iterable[Any] | None, name: str = "values", allow_empty: bool = False) -> list[Any]:
    """
    Materialize an expectation argument.

    Raises:
        PreconditionError: If values is None, not iterable, or empty
            when allow_empty is False
    """
    if values is None:
        raise PreconditionError(f"The {name} to look for should not be None")
    materialized = _as_list(values, name)
    if not materialized and not allow_empty:
        raise PreconditionError(f"The {name} to look for should not be empty")
    return materialized


def require_times(times: Any) -> int:
    """Check a cardinality threshold: a non-negative integer."""
    if isinstance(times, bool) or not isinstance(times, int):
        raise PreconditionError(f"times must be an integer, got {type(times).__name__}")
    if times < 0:
        raise PreconditionError(f"times must be >= 0, got {times}")
    return times


def require_size(size: Any) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise PreconditionError(f"expected size must be an integer, got {type(size).__name__}")
    return size


def size_of(other: Iterable[Any] | None) -> int:
    if other is None:
        raise PreconditionError("The iterable to compare sizes with should not be None")
    if isinstance(other, Sized):
        return len(other)
    return len(_as_list(other, "other"))


def _as_list(values: Iterable[Any], name: str) -> list[Any]:
    if isinstance(values, (str, bytes)):
        raise PreconditionError(f"{name} must be a collection, not {type(values).__name__}")
    try:
        return list(values)
    except TypeError:
        raise PreconditionError(
            f"{name} must be iterable, got {type(values).__name__}"
        ) from None
