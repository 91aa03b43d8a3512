"""
Property extraction.

Projects a collection of objects onto the values of one (possibly
nested) property, keeping the source order and length.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..assertions.errors import PropertyResolutionError
from ..assertions.preconditions import require_actual
from .accessors import DefaultMemberAccessor, MemberAccessor, MissingMember
from .path import parse_property_path

logger = logging.getLogger(__name__)


class PropertyExtractor:
    """
    Resolves a dotted property path against each element of a collection.

    A None element, or a None intermediate value, yields None for that
    slot. A member that does not exist on an element's type is a
    structural error and aborts the whole extraction.

    Example:
        extractor = PropertyExtractor()
        extractor.extract(fellowship, "race.name")  # ["Hobbit", "Hobbit", "Man"]
    """

    def __init__(self, accessor: MemberAccessor | None = None):
        self.accessor = accessor or DefaultMemberAccessor()

    def extract(self, collection: Iterable[Any] | None, path: str) -> list[Any]:
        """
        Extract the property at ``path`` from every element.

        Raises:
            PreconditionError: If collection or path is None
            PropertyPathError: If the path is malformed
            PropertyResolutionError: If a segment cannot be resolved
        """
        elements = require_actual(collection)
        segments = parse_property_path(path)
        logger.debug(f"Extracting {'.'.join(segments)} from {len(elements)} element(s)")
        return [self._resolve(element, path, segments) for element in elements]

    def extract_one(self, element: Any, path: str) -> Any:
        """Extract the property at ``path`` from a single element."""
        return self._resolve(element, path, parse_property_path(path))

    def _resolve(self, element: Any, path: str, segments: tuple[str, ...]) -> Any:
        value = element
        for segment in segments:
            if value is None:
                return None
            try:
                value = self.accessor.get_member(value, segment)
            except MissingMember:
                raise PropertyResolutionError(path, segment, type(value).__name__) from None
        return value


def extract(collection: Iterable[Any] | None, path: str) -> list[Any]:
    """Extract the property at ``path`` from every element with the default accessor."""
    return PropertyExtractor().extract(collection, path)
