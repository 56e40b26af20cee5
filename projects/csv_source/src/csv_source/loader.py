"""Loading of source rows from files, open handles, or memory."""

from collections.abc import Iterable, Mapping, Sequence
from csv import reader
from io import TextIOBase
from os import PathLike
from pathlib import Path
from typing import IO, Any, NamedTuple

from csv_source.exceptions import InvalidSourceError
from csv_source.types import Row

type Source = str | PathLike[str] | IO[str] | TextIOBase | Iterable[Row]


class LoadedSource(NamedTuple):
    """Rows of a source, plus the path they were read from if any."""

    rows: list[Row]
    path: Path | None = None


def read_csv(
    handle: Iterable[str],
    csv_options: Mapping[str, Any] | None = None,
) -> list[Row]:
    """Read every row from an open text handle."""
    return list(reader(handle, **dict(csv_options or {})))


def read_csv_file(
    path: Path,
    *,
    encoding: str | None = None,
    csv_options: Mapping[str, Any] | None = None,
) -> list[Row]:
    """Read every row from the CSV file at the given path."""
    with path.open(encoding=encoding, newline="") as handle:
        return read_csv(handle, csv_options)


def is_row(value: object) -> bool:
    """Return whether a value can be used as a row of field values."""
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def load_source(
    source: Source,
    *,
    encoding: str | None = None,
    csv_options: Mapping[str, Any] | None = None,
) -> LoadedSource:
    """Load all rows of a source into memory."""
    if isinstance(source, str | PathLike):
        path = Path(source)
        return LoadedSource(
            read_csv_file(path, encoding=encoding, csv_options=csv_options),
            path,
        )

    # Open handles belong to the caller and are left open
    if isinstance(source, TextIOBase) or hasattr(source, "readline"):
        return LoadedSource(read_csv(source, csv_options))  # pyright: ignore[reportArgumentType]

    if isinstance(source, Iterable) and not isinstance(source, bytes):
        rows = list(source)
        if rows and not is_row(rows[0]):
            msg = "source must be a path to a file or a sequence of rows"
            raise InvalidSourceError(msg)
        return LoadedSource(rows)

    msg = "source must be a path to a file or a sequence of rows"
    raise InvalidSourceError(msg)
