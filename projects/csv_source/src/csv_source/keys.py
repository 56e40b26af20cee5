"""Key derivation and composite key composition."""

from collections.abc import Callable, Iterable, Sequence

from csv_source.fields import field_ids
from csv_source.types import ByIndex, FieldSpec, KeySpec, Row, SourceOptions, ValueType

type KeyComposer = Callable[[Row], tuple[str, str]]

# Joins key field values; not expected to appear in normal data
KEY_SEPARATOR = "~"

DEFAULT_CHILD = (ByIndex(0),)


def _given[T](singular: T | None, plural: T | None) -> T | None:
    """Return the singular spelling of an option if set, else the plural."""
    return singular if singular is not None else plural


def derive_key_spec(options: SourceOptions) -> KeySpec:
    """Work out the parent and child fields from the key options.

    Explicit parent/child options win. Otherwise a (composite) key field option
    is split so that the last field is the child and the rest are the parent.
    With no key options at all, the first field is the key.
    """
    parent: FieldSpec | Sequence[FieldSpec] | None = _given(
        options.get("parent_field"),
        options.get("parent_fields"),
    )
    child: FieldSpec | Sequence[FieldSpec] | None = _given(
        options.get("child_field"),
        options.get("child_fields"),
    )
    if parent is not None or child is not None:
        return KeySpec(
            parent=field_ids(parent),
            child=field_ids(child) if child is not None else DEFAULT_CHILD,
        )

    if key := field_ids(_given(options.get("key_field"), options.get("key_fields"))):
        return KeySpec(parent=key[:-1], child=key[-1:])

    return KeySpec(parent=(), child=DEFAULT_CHILD)


def key_value(value: ValueType, *, case_sensitive: bool) -> str:
    """Return the string form of a value as used within a key."""
    text = "" if value is None else str(value)
    return text if case_sensitive else text.upper()


def join_key(values: Iterable[str]) -> str:
    """Join key values into a single key."""
    return KEY_SEPARATOR.join(values)


def create_key_composer(
    key_positions: Iterable[int],
    parent_count: int,
    *,
    case_sensitive: bool,
) -> KeyComposer:
    """Create a composer returning the (key, parent key) pair for a row."""
    # Store the positions for re-use across every row
    key_positions = tuple(key_positions)

    def composer(values: Row) -> tuple[str, str]:
        key_values = [
            key_value(values[position], case_sensitive=case_sensitive)
            for position in key_positions
        ]
        return join_key(key_values), join_key(key_values[:parent_count])

    return composer
