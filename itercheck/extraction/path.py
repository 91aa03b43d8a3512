"""
Property path parsing.

Paths are dotted chains of property names such as ``"race.name"``.
The path is split on dots (a leading ``$.`` is dropped) and each
segment is handed to jsonpath-ng as a quoted field, so any member
name is accepted: reserved words like ``where``, non-ASCII names,
keys starting with a digit. A segment may also be quoted by the
caller (``"'full name'.first"``) to include a dot.

Segments written with index, slice, wildcard or filter syntax are
parsed unquoted and rejected; only plain field steps are allowed.
"""

from __future__ import annotations

import re

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import Child, Fields, Root, This

from ..assertions.errors import PreconditionError, PropertyPathError

_QUOTES = "'\""
# jsonpath syntax that marks a segment as something other than a member name
_STEP_SYNTAX = re.compile(r"[\[\]*?@()]")


def parse_property_path(path: str) -> tuple[str, ...]:
    """
    Split a property path into its segment names.

    Args:
        path: Dotted property path, e.g. "race.name" or "$.race.name"

    Returns:
        Tuple of segment names, in resolution order

    Raises:
        PreconditionError: If path is None
        PropertyPathError: If the path is empty, has an empty segment,
            or uses indexes, slices, wildcards or filters
    """
    if path is None:
        raise PreconditionError("The property path should not be None")
    if not isinstance(path, str) or not path.strip():
        raise PropertyPathError(str(path), "path must be a non-empty string")

    text = path.strip()
    if text == "$":
        raise PropertyPathError(path, "path does not name any property")
    if text.startswith("$."):
        text = text[2:]

    segments: list[str] = []
    for segment in _split(path, text):
        segments.extend(_parse_segment(path, segment))
    return tuple(segments)


def _split(path: str, text: str) -> list[str]:
    """Split on dots that are not inside quotes."""
    parts: list[str] = []
    current: list[str] = []
    quote = None
    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
            current.append(char)
        elif char == ".":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    if quote:
        raise PropertyPathError(path, "unterminated quote")
    parts.append("".join(current))
    return [part.strip() for part in parts]


def _parse_segment(path: str, segment: str) -> list[str]:
    if not segment:
        raise PropertyPathError(path, "empty segment")

    if segment[0] in _QUOTES or _STEP_SYNTAX.search(segment):
        expression_text = segment
    elif "'" not in segment:
        expression_text = "'" + segment.replace("\\", "\\\\") + "'"
    elif '"' not in segment:
        expression_text = '"' + segment.replace("\\", "\\\\") + '"'
    else:
        raise PropertyPathError(path, f"segment {segment!r} mixes both quote characters")

    try:
        expression = parse_jsonpath(expression_text)
    except (JsonPathLexerError, JsonPathParserError) as e:
        raise PropertyPathError(path, str(e)) from e
    except Exception as e:
        raise PropertyPathError(path, f"{type(e).__name__}: {e}") from e

    return _flatten(path, expression)


def _flatten(path: str, node: object) -> list[str]:
    if isinstance(node, Child):
        return _flatten(path, node.left) + _flatten(path, node.right)
    if isinstance(node, (Root, This)):
        return []
    if isinstance(node, Fields):
        if len(node.fields) != 1 or node.fields[0] == "*":
            raise PropertyPathError(path, "wildcards and field lists are not supported")
        return [node.fields[0]]
    raise PropertyPathError(path, f"unsupported step {node!s}")
