"""
Property Extraction

Projects a collection of objects onto one named, possibly nested,
property so that the resulting values can be asserted on.

Usage:
    from itercheck.extraction import extract

    extract([{"name": "Frodo"}, {"name": "Sam"}], "name")  # ["Frodo", "Sam"]
    extract(fellowship, "race.name")
"""

from .accessors import (
    AttributeAccessor,
    DefaultMemberAccessor,
    MappingAccessor,
    MemberAccessor,
    MissingMember,
)
from .extractor import PropertyExtractor, extract
from .path import parse_property_path

__all__ = [
    "extract",
    "PropertyExtractor",
    "parse_property_path",
    "MemberAccessor",
    "MappingAccessor",
    "AttributeAccessor",
    "DefaultMemberAccessor",
    "MissingMember",
]
