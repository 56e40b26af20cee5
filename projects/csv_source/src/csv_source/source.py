"""Indexing of one side of a CSV comparison."""

from __future__ import annotations

from enum import StrEnum, auto
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Unpack

from csv_source.fields import infer_field_names, resolve_fields
from csv_source.filters import RowFilter, convert_filter, resolve_filter
from csv_source.keys import create_key_composer, derive_key_spec
from csv_source.loader import Source, load_source

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from pathlib import Path

    from csv_source.keys import KeyComposer
    from csv_source.types import (
        FieldId,
        FilterRule,
        Record,
        Row,
        SourceOptions,
        ValueType,
    )

logger = getLogger(__name__)


class RowKind(StrEnum):
    """How a row of the source is treated during indexing."""

    HEADER = auto()
    IGNORED_HEADER = auto()
    DATA = auto()


class CsvSource:
    """One side of a CSV comparison, indexed on its key fields.

    The key is made up of the parent fields followed by the child fields. If no
    key options are given, the first field is the key. A composite key given via
    ``key_field``/``key_fields`` is split so that its last field is the child
    and the preceding fields identify the parent. Fields can be given by name
    (matched case-insensitively) or by 0-based position.

    The whole source is indexed on construction. Rows are kept in ``lines``
    under their key, and each parent key in ``groups`` lists the keys of its
    children in source order. The first row seen for a key wins; later rows
    with the same key are skipped and reported in ``warnings``.
    """

    def __init__(self, source: Source, **options: Unpack[SourceOptions]) -> None:
        """Load and index the source.

        Args:
            source: Path to a CSV file, an open text handle, or an iterable of
                rows. Without ``field_names``, the first row names the fields.
            **options: Indexing options, see ``SourceOptions``.

        Raises:
            InvalidSourceError: If the source cannot be read as rows.
            FieldNotFoundError: If a key or filter field is not in the source.
            InvalidFilterSpecError: If include/exclude is not a mapping.
            UnsupportedFilterError: If a filter rule is not recognised.

        """
        self.case_sensitive: bool = options.get("case_sensitive", True)
        self.trim_whitespace: bool = options.get("trim_whitespace", False)
        self._key_spec = derive_key_spec(options)
        self._include = convert_filter(options.get("include"), "include")
        self._exclude = convert_filter(options.get("exclude"), "exclude")

        self.field_names: tuple[str, ...] = ()
        self.key_fields: tuple[str, ...] = ()
        self.parent_fields: tuple[str, ...] = ()
        self.child_fields: tuple[str, ...] = ()
        self.key_field_indexes: tuple[int, ...] = ()
        self.parent_field_indexes: tuple[int, ...] = ()
        self.child_field_indexes: tuple[int, ...] = ()

        self.lines: dict[str, Record] = {}
        self.groups: dict[str, list[str]] = {}
        self.warnings: list[str] = []
        self.line_count = 0
        self.skip_count = 0

        self._row_filter = RowFilter({}, {}, case_sensitive=self.case_sensitive)
        self._compose: KeyComposer | None = None

        field_names = options.get("field_names")
        if field_names is not None:
            self._set_field_names(field_names)

        loaded = load_source(
            source,
            encoding=options.get("encoding"),
            csv_options=options.get("csv_options"),
        )
        self.path: Path | None = loaded.path
        self._index(loaded.rows, ignore_header=options.get("ignore_header", False))

    def _set_field_names(self, field_names: Sequence[ValueType]) -> None:
        """Fix the field names and resolve key and filter fields against them."""
        self.field_names = infer_field_names(field_names)

        self.key_field_indexes = self._resolve(self._key_spec.key)
        self.parent_field_indexes = self._resolve(self._key_spec.parent)
        self.child_field_indexes = self._resolve(self._key_spec.child)
        self.key_fields = self._names(self.key_field_indexes)
        self.parent_fields = self._names(self.parent_field_indexes)
        self.child_fields = self._names(self.child_field_indexes)

        self._row_filter = RowFilter(
            self._resolve_rules(self._include),
            self._resolve_rules(self._exclude),
            case_sensitive=self.case_sensitive,
        )
        self._compose = create_key_composer(
            self.key_field_indexes,
            len(self.parent_field_indexes),
            case_sensitive=self.case_sensitive,
        )

    def _resolve(self, fields: Iterable[FieldId]) -> tuple[int, ...]:
        return resolve_fields(fields, self.field_names)

    def _resolve_rules(self, rules: dict[FieldId, FilterRule]) -> dict[int, FilterRule]:
        return resolve_filter(rules, self.field_names)

    def _names(self, indexes: Iterable[int]) -> tuple[str, ...]:
        return tuple(self.field_names[index] for index in indexes)

    def _row_kind(self, line_num: int, *, ignore_header: bool) -> RowKind:
        """Classify a row by its 1-based line number."""
        if line_num == 1:
            if self._compose is None:
                return RowKind.HEADER
            if ignore_header:
                return RowKind.IGNORED_HEADER
        return RowKind.DATA

    def _index(self, rows: Iterable[Row], *, ignore_header: bool) -> None:
        """Index every data row of the source."""
        for line_num, row in enumerate(rows, start=1):
            match self._row_kind(line_num, ignore_header=ignore_header):
                case RowKind.HEADER:
                    self._set_field_names(row)
                case RowKind.IGNORED_HEADER:
                    continue
                case RowKind.DATA:
                    self._index_row(row, line_num)

        logger.debug(
            "Indexed %d lines, skipped %d, from %s",
            self.line_count,
            self.skip_count,
            self.path or "memory",
        )

    def _index_row(self, row: Row, line_num: int) -> None:
        """Add a single data row to the index, unless filtered or a duplicate."""
        values: list[ValueType] = []
        for position in range(len(self.field_names)):
            value = row[position] if position < len(row) else None
            if self.trim_whitespace and isinstance(value, str):
                value = value.strip()
            values.append(value)
            # Stop at the first field that filters out the row
            if self._row_filter and self._row_filter.rejects(position, value):
                self.skip_count += 1
                return

        key, parent_key = self._compose(values)  # pyright: ignore[reportOptionalCall]
        if key in self.lines:
            self.warnings.append(
                f"Duplicate key '{key}' encountered and ignored at line {line_num}",
            )
            logger.warning(
                "Duplicate key '%s' encountered and ignored at line %d",
                key,
                line_num,
            )
            self.skip_count += 1
            return

        self.lines[key] = MappingProxyType(
            dict(zip(self.field_names, values, strict=True)),
        )
        self.groups.setdefault(parent_key, []).append(key)
        self.line_count += 1

    def get(self, key: str) -> Record | None:
        """Return the record for the given key, or None if not indexed."""
        return self.lines.get(key)

    def __getitem__(self, key: str) -> Record | None:
        """Return the record for the given key, or None if not indexed."""
        return self.lines.get(key)

    def __contains__(self, key: object) -> bool:
        """Return whether a record is indexed under the given key."""
        return key in self.lines

    def __len__(self) -> int:
        """Return the number of indexed records."""
        return self.line_count

    def __iter__(self) -> Iterator[str]:
        """Iterate over the indexed keys in source order."""
        return iter(self.lines)
