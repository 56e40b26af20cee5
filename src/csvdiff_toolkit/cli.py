"""Command line interface for the CSV diff toolkit."""

import csv
import json
import logging
import re
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Literal

from cyclopts import App
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from csv_source import (
    CsvSource,
    SourceError,
    SourceOptions,
    source_to_html,
    source_to_json,
    source_to_summary,
)
from csv_source.types import FieldSpec, Record

app = App(help="CSV diff toolkit CLI tool")


type Format = Literal["table", "json", "html"]

console = Console()
err_console = Console(stderr=True)

CSV_EXTENSIONS = {".csv", ".tsv", ".txt"}


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}")


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}")


def configure_logging(*, verbose: bool) -> None:
    """Send indexing log messages to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def validate_source_location(source_location: Path) -> None:
    """Validate that the source file exists and looks like delimited text."""
    if not source_location.is_file():
        print_error(f"Source file does not exist: {source_location}")
        sys.exit(1)
    if source_location.suffix.lower() not in CSV_EXTENSIONS:
        print_error(
            f"Source file has invalid extension: {', '.join(sorted(CSV_EXTENSIONS))}",
        )
        sys.exit(1)


def parse_field(spec: str) -> FieldSpec:
    """Treat digit-only field specs as positions, anything else as a name."""
    return int(spec) if spec.isdigit() else spec


def parse_filters(specs: Iterable[str] | None) -> dict[FieldSpec, re.Pattern[str]] | None:
    """Parse FIELD=REGEX filter specs into a filter mapping."""
    if not specs:
        return None
    filters: dict[FieldSpec, re.Pattern[str]] = {}
    for spec in specs:
        field, sep, pattern = spec.partition("=")
        if not sep or not field:
            msg = f"Filter must be given as FIELD=REGEX: {spec}"
            raise ValueError(msg)
        filters[parse_field(field)] = re.compile(pattern)
    return filters


def build_options(  # noqa: PLR0913
    *,
    key_field: list[str] | None = None,
    parent_field: list[str] | None = None,
    child_field: list[str] | None = None,
    field_names: list[str] | None = None,
    ignore_header: bool = False,
    case_insensitive: bool = False,
    trim_whitespace: bool = False,
    encoding: str | None = None,
    delimiter: str | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> SourceOptions:
    """Translate command line flags into source options."""
    options: SourceOptions = {
        "ignore_header": ignore_header,
        "case_sensitive": not case_insensitive,
        "trim_whitespace": trim_whitespace,
    }
    if key_field:
        options["key_fields"] = [parse_field(field) for field in key_field]
    if parent_field:
        options["parent_fields"] = [parse_field(field) for field in parent_field]
    if child_field:
        options["child_fields"] = [parse_field(field) for field in child_field]
    if field_names:
        options["field_names"] = field_names
    if encoding:
        options["encoding"] = encoding
    if delimiter:
        if len(delimiter) != 1:
            msg = f"Delimiter must be a single character: {delimiter!r}"
            raise ValueError(msg)
        options["csv_options"] = {"delimiter": delimiter}
    if (include_filters := parse_filters(include)) is not None:
        options["include"] = include_filters
    if (exclude_filters := parse_filters(exclude)) is not None:
        options["exclude"] = exclude_filters
    return options


def load(source_location: Path, options: SourceOptions) -> CsvSource:
    """Index the source file, exiting with an error message on failure."""
    validate_source_location(source_location)
    print_info(f"Source: {source_location}")
    try:
        return CsvSource(source_location, **options)
    except (SourceError, OSError, UnicodeDecodeError, csv.Error) as e:
        print_error(f"Failed to index source: {e}")
        sys.exit(1)


def format_summary_table(summary: Mapping[str, Any], warnings: Iterable[str]) -> None:
    """Format an index summary as a rich table."""
    table = Table(title="Source Index")
    table.add_column("Property", style="bold cyan")
    table.add_column("Value")
    for key, value in summary.items():
        table.add_row(
            key,
            ", ".join(value) if isinstance(value, list) else str(value),
        )
    console.print(table)

    for warning in warnings:
        console.print(f"[yellow]![/] {escape(warning)}")


def format_record_table(record: Record) -> None:
    """Format a record as a rich table."""
    table = Table(show_header=False)
    table.add_column("Field", style="bold blue")
    table.add_column("Value")
    for field, value in record.items():
        table.add_row(field, "" if value is None else str(value))
    console.print(table)


@app.command
def index(  # noqa: PLR0913
    source_location: Path,
    fmt: Format = "table",
    *,
    key_field: list[str] | None = None,
    parent_field: list[str] | None = None,
    child_field: list[str] | None = None,
    field_names: list[str] | None = None,
    ignore_header: bool = False,
    case_insensitive: bool = False,
    trim_whitespace: bool = False,
    encoding: str | None = None,
    delimiter: str | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    verbose: bool = False,
) -> None:
    """Index a CSV file and report its keys, groups, and warnings."""
    configure_logging(verbose=verbose)
    try:
        options = build_options(
            key_field=key_field,
            parent_field=parent_field,
            child_field=child_field,
            field_names=field_names,
            ignore_header=ignore_header,
            case_insensitive=case_insensitive,
            trim_whitespace=trim_whitespace,
            encoding=encoding,
            delimiter=delimiter,
            include=include,
            exclude=exclude,
        )
    except (ValueError, re.error) as e:
        print_error(str(e))
        sys.exit(1)

    source = load(source_location, options)

    # Output to stdout in requested format (keep stdout clean for data)
    if fmt == "json":
        sys.stdout.write(source_to_json(source))
    elif fmt == "html":
        sys.stdout.write(source_to_html(source))
    elif fmt == "table":
        format_summary_table(source_to_summary(source), source.warnings)

    print_success(f"Indexed {source.line_count} lines ({source.skip_count} skipped)")


@app.command
def lookup(  # noqa: PLR0913
    source_location: Path,
    key: str,
    fmt: Literal["table", "json"] = "table",
    *,
    key_field: list[str] | None = None,
    parent_field: list[str] | None = None,
    child_field: list[str] | None = None,
    field_names: list[str] | None = None,
    ignore_header: bool = False,
    case_insensitive: bool = False,
    trim_whitespace: bool = False,
    encoding: str | None = None,
    delimiter: str | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    verbose: bool = False,
) -> None:
    """Look up a single record of a CSV file by its key."""
    configure_logging(verbose=verbose)
    try:
        options = build_options(
            key_field=key_field,
            parent_field=parent_field,
            child_field=child_field,
            field_names=field_names,
            ignore_header=ignore_header,
            case_insensitive=case_insensitive,
            trim_whitespace=trim_whitespace,
            encoding=encoding,
            delimiter=delimiter,
            include=include,
            exclude=exclude,
        )
    except (ValueError, re.error) as e:
        print_error(str(e))
        sys.exit(1)

    source = load(source_location, options)

    record = source.get(key if source.case_sensitive else key.upper())
    if record is None:
        print_error(f"Key not found: {key}")
        sys.exit(1)

    if fmt == "json":
        sys.stdout.write(json.dumps(dict(record), ensure_ascii=False))
    else:
        format_record_table(record)


def main() -> None:
    """Run the CLI."""
    app()


if __name__ == "__main__":
    main()
