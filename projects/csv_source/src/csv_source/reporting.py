"""Summary, JSON, and HTML renderings of an indexed source."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from csv_source.source import CsvSource

TEMPLATE_DIR = Path(__file__).parent / "templates"

_JINJA_ENV = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)


def encoder(obj: object) -> dict[str, Any]:
    """Convert read-only records to regular dicts for JSON serialization."""
    if isinstance(obj, Mapping):
        return dict(obj)  # pyright: ignore[reportUnknownArgumentType]
    msg = f"Object of type {type(obj)} is not JSON serializable"
    raise TypeError(msg)


def source_to_summary(source: CsvSource) -> dict[str, Any]:
    """Summarise an indexed source.

    The summary holds the source name, the resolved key fields, and the line,
    skip, group and warning counts, suitable for display in terminal tables.
    """
    return {
        "name": str(source.path) if source.path else "<memory>",
        "key_fields": list(source.key_fields),
        "parent_fields": list(source.parent_fields),
        "child_fields": list(source.child_fields),
        "lines": source.line_count,
        "skipped": source.skip_count,
        "groups": len(source.groups),
        "warnings": len(source.warnings),
    }


def source_to_dict(source: CsvSource) -> dict[str, Any]:
    """Return the full contents of an indexed source as plain data."""
    return {
        **source_to_summary(source),
        "field_names": list(source.field_names),
        "case_sensitive": source.case_sensitive,
        "trim_whitespace": source.trim_whitespace,
        "warning_messages": source.warnings,
        "index": source.groups,
        "records": source.lines,
    }


def source_to_json(source: CsvSource, **kwargs: Any) -> str:  # noqa: ANN401
    """Convert an indexed source to a JSON string."""
    return json.dumps(source_to_dict(source), default=encoder, ensure_ascii=False, **kwargs)


def source_to_html(source: CsvSource) -> str:
    """Render an HTML report of an indexed source."""
    template = _JINJA_ENV.get_template("report.html")
    return template.render(source=source, summary=source_to_summary(source))
