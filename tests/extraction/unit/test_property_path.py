"""Property path parsing tests."""

from __future__ import annotations

import pytest
from itercheck.assertions import PreconditionError, PropertyPathError
from itercheck.extraction import parse_property_path


def test_single_segment() -> None:
    assert parse_property_path("name") == ("name",)


def test_nested_segments() -> None:
    assert parse_property_path("race.name") == ("race", "name")
    assert parse_property_path("a.b.c") == ("a", "b", "c")


def test_root_prefix_is_ignored() -> None:
    assert parse_property_path("$.race.name") == ("race", "name")


def test_none_path_is_a_precondition() -> None:
    with pytest.raises(PreconditionError):
        parse_property_path(None)  # type: ignore[arg-type]


@pytest.mark.parametrize("path", ["", "   ", "$"])
def test_empty_paths_are_rejected(path: str) -> None:
    with pytest.raises(PropertyPathError):
        parse_property_path(path)


@pytest.mark.parametrize("path", ["items[0]", "race.*", "a..b"])
def test_non_field_steps_are_rejected(path: str) -> None:
    with pytest.raises(PropertyPathError) as excinfo:
        parse_property_path(path)

    assert excinfo.value.path == path


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("where", ("where",)),
        ("café", ("café",)),
        ("2fa", ("2fa",)),
        ("and.or", ("and", "or")),
        ("$.where.café", ("where", "café")),
        ("it's", ("it's",)),
    ],
)
def test_any_member_name_is_a_valid_segment(path: str, expected: tuple[str, ...]) -> None:
    assert parse_property_path(path) == expected


def test_quoted_segment_may_contain_dots() -> None:
    assert parse_property_path("'full.name'.first") == ("full.name", "first")


@pytest.mark.parametrize("path", ["name.", "$..name", "'unterminated.name"])
def test_malformed_segments_are_rejected(path: str) -> None:
    with pytest.raises(PropertyPathError):
        parse_property_path(path)
