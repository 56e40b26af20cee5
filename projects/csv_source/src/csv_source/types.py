"""Type definitions for indexed CSV sources."""

from collections.abc import Callable, Mapping, Sequence
from re import Pattern
from typing import Any, NamedTuple, NotRequired, TypedDict

type ValueType = str | int | float | None
type Row = Sequence[ValueType]
type Record = Mapping[str, ValueType]


class ByName(NamedTuple):
    """Field identified by its name, matched case-insensitively."""

    name: str


class ByIndex(NamedTuple):
    """Field identified by its 0-based position."""

    index: int


type FieldId = ByName | ByIndex
type FieldSpec = FieldId | str | int


class LiteralRule(NamedTuple):
    """Matches a field whose value equals the given text."""

    text: str


class PatternRule(NamedTuple):
    """Matches a field whose value contains a match for the pattern."""

    pattern: Pattern[str]


class PredicateRule(NamedTuple):
    """Matches a field for which the predicate returns true."""

    predicate: Callable[[ValueType], bool]


type FilterRule = LiteralRule | PatternRule | PredicateRule
type FilterSpec = Mapping[FieldSpec, FilterRule | str | Pattern[str] | Callable[..., Any]]


class KeySpec(NamedTuple):
    """Parent and child fields that together form the unique key of a row."""

    parent: tuple[FieldId, ...]
    child: tuple[FieldId, ...]

    @property
    def key(self) -> tuple[FieldId, ...]:
        """All key fields, parent fields first."""
        return self.parent + self.child


class SourceOptions(TypedDict):
    """Options recognised when indexing a source."""

    encoding: NotRequired[str]
    csv_options: NotRequired[Mapping[str, Any]]
    field_names: NotRequired[Sequence[str]]
    ignore_header: NotRequired[bool]
    key_field: NotRequired[FieldSpec | Sequence[FieldSpec]]
    key_fields: NotRequired[FieldSpec | Sequence[FieldSpec]]
    parent_field: NotRequired[FieldSpec | Sequence[FieldSpec]]
    parent_fields: NotRequired[FieldSpec | Sequence[FieldSpec]]
    child_field: NotRequired[FieldSpec | Sequence[FieldSpec]]
    child_fields: NotRequired[FieldSpec | Sequence[FieldSpec]]
    case_sensitive: NotRequired[bool]
    trim_whitespace: NotRequired[bool]
    include: NotRequired[FilterSpec]
    exclude: NotRequired[FilterSpec]
