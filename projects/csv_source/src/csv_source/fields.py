"""Field name inference and field identifier resolution."""

from collections.abc import Iterable, Sequence

from csv_source.exceptions import FieldNotFoundError
from csv_source.types import ByIndex, ByName, FieldId, FieldSpec, Row


def field_id(spec: FieldSpec) -> FieldId:
    """Convert a name, position, or identifier into a field identifier."""
    if isinstance(spec, ByName | ByIndex):
        return spec
    # bool is an int subclass, but never a position
    if isinstance(spec, bool):
        msg = f"Invalid field identifier: {spec!r}"
        raise FieldNotFoundError(msg)
    if isinstance(spec, int):
        return ByIndex(spec)
    if isinstance(spec, str):
        return ByName(spec)
    msg = f"Invalid field identifier: {spec!r}"
    raise FieldNotFoundError(msg)


def field_ids(specs: FieldSpec | Sequence[FieldSpec] | None) -> tuple[FieldId, ...]:
    """Convert a single field spec or a sequence of them into identifiers."""
    if specs is None:
        return ()
    if isinstance(specs, str | int | ByName | ByIndex):
        return (field_id(specs),)
    return tuple(field_id(spec) for spec in specs)


def infer_field_names(header: Row) -> tuple[str, ...]:
    """Use a header row as field names, naming blank columns by position."""
    return tuple(
        str(value) if value not in (None, "") else str(index)
        for index, value in enumerate(header)
    )


def resolve_field(field: FieldId, field_names: Sequence[str]) -> int:
    """Return the position of a field within the field names."""
    if isinstance(field, ByIndex):
        if 0 <= field.index < len(field_names):
            return field.index
        msg = (
            f"Field index {field.index} is out of range for source field names: "
            f"{', '.join(field_names)}"
        )
        raise FieldNotFoundError(msg)

    wanted = field.name.lower()
    for index, name in enumerate(field_names):
        if name.lower() == wanted:
            return index
    msg = (
        f"Could not locate field '{field.name}' in source field names: "
        f"{', '.join(field_names)}"
    )
    raise FieldNotFoundError(msg)


def resolve_fields(
    fields: Iterable[FieldId],
    field_names: Sequence[str],
) -> tuple[int, ...]:
    """Return the positions of the given fields within the field names."""
    return tuple(resolve_field(field, field_names) for field in fields)
