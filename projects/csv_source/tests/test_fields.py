"""Tests for field name inference and field resolution."""

import pytest

from csv_source.exceptions import FieldNotFoundError
from csv_source.fields import field_id, field_ids, infer_field_names, resolve_fields
from csv_source.types import ByIndex, ByName

FIELD_NAMES = ("Id", "Parent", "Name")


def test_infer_field_names_uses_header_values() -> None:
    """Test header values become field names."""
    assert infer_field_names(["id", "name"]) == ("id", "name")


def test_infer_field_names_names_blank_columns_by_position() -> None:
    """Test blank or missing header values are replaced by their position."""
    assert infer_field_names(["id", "", None, "total"]) == ("id", "1", "2", "total")


def test_field_id_coerces_plain_values() -> None:
    """Test strings become names and integers become positions."""
    assert field_id("name") == ByName("name")
    assert field_id(2) == ByIndex(2)
    assert field_id(ByName("x")) == ByName("x")


def test_field_id_rejects_booleans() -> None:
    """Test booleans are not accepted as positions."""
    with pytest.raises(FieldNotFoundError):
        field_id(True)  # noqa: FBT003


def test_field_ids_accepts_single_or_sequence() -> None:
    """Test a single spec and a sequence of specs both yield identifier tuples."""
    assert field_ids("id") == (ByName("id"),)
    assert field_ids(["parent", 2]) == (ByName("parent"), ByIndex(2))
    assert field_ids(ByIndex(1)) == (ByIndex(1),)
    assert field_ids(None) == ()


def test_resolve_fields_matches_names_case_insensitively() -> None:
    """Test names resolve to positions regardless of case."""
    fields = [ByName("name"), ByName("ID"), ByIndex(1)]

    assert resolve_fields(fields, FIELD_NAMES) == (2, 0, 1)


def test_resolve_fields_unknown_name() -> None:
    """Test an unknown name raises and lists the available field names."""
    with pytest.raises(FieldNotFoundError, match="Could not locate field 'missing'") as exc:
        resolve_fields([ByName("missing")], FIELD_NAMES)

    assert "Id, Parent, Name" in str(exc.value)


@pytest.mark.parametrize("index", [3, -1])
def test_resolve_fields_position_out_of_range(index: int) -> None:
    """Test positions outside the field names are rejected."""
    with pytest.raises(FieldNotFoundError, match="out of range"):
        resolve_fields([ByIndex(index)], FIELD_NAMES)
