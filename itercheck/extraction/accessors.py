"""
Member access for property extraction.

An accessor resolves one named member on one value. The extractor
keeps the traversal and None short-circuit logic; accessors only
know how to read a member from a given kind of object.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class MissingMember(Exception):
    """Raised by an accessor when the target has no such member."""


class MemberAccessor(ABC):
    """Abstract reader of a named member."""

    @abstractmethod
    def get_member(self, target: Any, name: str) -> Any:
        """
        Read ``name`` from ``target``.

        Raises:
            MissingMember: If the target has no member with that name
        """


class MappingAccessor(MemberAccessor):
    """Reads keys of mappings (dicts, parsed JSON/YAML documents)."""

    def get_member(self, target: Any, name: str) -> Any:
        if not isinstance(target, Mapping) or name not in target:
            raise MissingMember(name)
        return target[name]


class AttributeAccessor(MemberAccessor):
    """Reads attributes and properties (dataclasses, namedtuples, plain objects)."""

    def get_member(self, target: Any, name: str) -> Any:
        try:
            return getattr(target, name)
        except AttributeError:
            raise MissingMember(name) from None


class DefaultMemberAccessor(MemberAccessor):
    """
    Mapping keys first, then attributes.

    A mapping whose key is missing still exposes its own attributes and
    properties, but not the container API (``items``, ``get``, ...),
    so a missing ``items`` key is not answered with a bound method.
    """

    def __init__(self):
        self._mappings = MappingAccessor()
        self._attributes = AttributeAccessor()

    def get_member(self, target: Any, name: str) -> Any:
        if isinstance(target, Mapping):
            try:
                return self._mappings.get_member(target, name)
            except MissingMember:
                if hasattr(dict, name) or hasattr(Mapping, name):
                    raise
        return self._attributes.get_member(target, name)
