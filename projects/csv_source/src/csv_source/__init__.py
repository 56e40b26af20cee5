"""Indexing of CSV sources for row-by-row comparison."""

from csv_source.exceptions import (
    FieldNotFoundError,
    InvalidFilterSpecError,
    InvalidSourceError,
    SourceError,
    UnsupportedFilterError,
)
from csv_source.keys import KEY_SEPARATOR
from csv_source.reporting import (
    source_to_html,
    source_to_json,
    source_to_summary,
)
from csv_source.source import CsvSource
from csv_source.types import (
    ByIndex,
    ByName,
    KeySpec,
    LiteralRule,
    PatternRule,
    PredicateRule,
    SourceOptions,
)

__all__ = [
    "KEY_SEPARATOR",
    "ByIndex",
    "ByName",
    "CsvSource",
    "FieldNotFoundError",
    "InvalidFilterSpecError",
    "InvalidSourceError",
    "KeySpec",
    "LiteralRule",
    "PatternRule",
    "PredicateRule",
    "SourceError",
    "SourceOptions",
    "UnsupportedFilterError",
    "source_to_html",
    "source_to_json",
    "source_to_summary",
]
