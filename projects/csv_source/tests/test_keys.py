"""Tests for key derivation and composition."""

from csv_source.keys import create_key_composer, derive_key_spec, key_value
from csv_source.types import ByIndex, ByName, KeySpec


def test_default_key_is_first_field() -> None:
    """Test that without key options the first field is the sole child key."""
    assert derive_key_spec({}) == KeySpec(parent=(), child=(ByIndex(0),))


def test_single_key_field() -> None:
    """Test a single key field becomes the child with no parent."""
    spec = derive_key_spec({"key_field": "id"})

    assert spec == KeySpec(parent=(), child=(ByName("id"),))
    assert spec.key == (ByName("id"),)


def test_composite_key_fields_split_into_parent_and_child() -> None:
    """Test all but the last key field identify the parent."""
    spec = derive_key_spec({"key_fields": ["country", "state", 2]})

    assert spec.parent == (ByName("country"), ByName("state"))
    assert spec.child == (ByIndex(2),)
    assert spec.key == (ByName("country"), ByName("state"), ByIndex(2))


def test_parent_only_defaults_child_to_first_field() -> None:
    """Test giving only a parent field makes the first field the child."""
    spec = derive_key_spec({"parent_field": "group"})

    assert spec == KeySpec(parent=(ByName("group"),), child=(ByIndex(0),))


def test_child_only_has_no_parent() -> None:
    """Test giving only child fields leaves the parent empty."""
    spec = derive_key_spec({"child_fields": ["a", "b"]})

    assert spec == KeySpec(parent=(), child=(ByName("a"), ByName("b")))


def test_parent_and_child_options_override_key_fields() -> None:
    """Test explicit parent/child options take priority over key fields."""
    spec = derive_key_spec(
        {"key_fields": ["x", "y"], "parent_fields": ["p"], "child_field": "c"},
    )

    assert spec.key == (ByName("p"), ByName("c"))


def test_singular_option_wins_over_plural() -> None:
    """Test key_field is preferred over key_fields."""
    spec = derive_key_spec({"key_field": "a", "key_fields": ["b", "c"]})

    assert spec.key == (ByName("a"),)


def test_empty_key_fields_fall_back_to_default() -> None:
    """Test an empty key field list uses the first field."""
    assert derive_key_spec({"key_fields": []}).key == (ByIndex(0),)


def test_key_value_folds_case_and_handles_none() -> None:
    """Test key values are stringified and upper-cased when case-insensitive."""
    assert key_value("abc", case_sensitive=True) == "abc"
    assert key_value("abc", case_sensitive=False) == "ABC"
    assert key_value(None, case_sensitive=False) == ""
    assert key_value(12, case_sensitive=True) == "12"


def test_key_composer_returns_key_and_parent_key() -> None:
    """Test the composite key and parent key are joined with the separator."""
    composer = create_key_composer([1, 0], 1, case_sensitive=True)

    assert composer(["c1", "P1", "ignored"]) == ("P1~c1", "P1")


def test_key_composer_without_parent_has_empty_parent_key() -> None:
    """Test rows without parent fields share the empty parent key."""
    composer = create_key_composer([0], 0, case_sensitive=False)

    assert composer(["abc", None]) == ("ABC", "")
