"""
Error taxonomy for the iterable assertion engine.

Three kinds of problems are kept apart:
    - PreconditionError: the call itself is malformed (None actual, None or
      empty expectation, negative times). Nothing is evaluated.
    - AssertionFailedError: the expectation was not met. Carries the
      failing AssertionResult with the full mismatch evidence.
    - PropertyResolutionError / PropertyPathError: a property path is
      invalid, or cannot be resolved on an element's type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import AssertionResult


class IterCheckError(Exception):
    """Base class for every error raised by itercheck."""


class PreconditionError(IterCheckError, ValueError):
    """Raised when an assertion is called with invalid arguments."""


class AssertionFailedError(IterCheckError, AssertionError):
    """Raised when an expectation is not met."""

    def __init__(self, result: AssertionResult):
        super().__init__(result.message)
        self.result = result

    def __str__(self) -> str:
        return str(self.result)


class PropertyPathError(IterCheckError, ValueError):
    """Raised when a property path cannot be parsed or is not a plain dotted path."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid property path {path!r}: {reason}")
        self.path = path
        self.reason = reason


class PropertyResolutionError(IterCheckError, LookupError):
    """Raised when a path segment does not exist on an element's type."""

    def __init__(self, path: str, segment: str, type_name: str):
        super().__init__(
            f"Unable to resolve property {segment!r} of path {path!r} on type {type_name}"
        )
        self.path = path
        self.segment = segment
        self.type_name = type_name
