"""Tests for loading source rows."""

from io import StringIO
from pathlib import Path

import pytest

from csv_source.exceptions import InvalidSourceError
from csv_source.loader import load_source


@pytest.fixture(name="semicolon_file")
def create_semicolon_file(tmp_path: Path) -> Path:
    """Create a semicolon separated file with non-ASCII content."""
    path = tmp_path / "people.csv"
    path.write_text("id;name\n1;Zoë\n2;Renée\n", encoding="latin-1")
    return path


def test_load_path_with_options(semicolon_file: Path) -> None:
    """Test files are read with the given encoding and reader options."""
    loaded = load_source(
        semicolon_file,
        encoding="latin-1",
        csv_options={"delimiter": ";"},
    )

    assert loaded.path == semicolon_file
    assert loaded.rows == [["id", "name"], ["1", "Zoë"], ["2", "Renée"]]


def test_load_path_given_as_string(semicolon_file: Path) -> None:
    """Test string paths are treated as files, not as rows."""
    loaded = load_source(str(semicolon_file), encoding="latin-1")

    assert loaded.path == semicolon_file
    assert loaded.rows[0] == ["id;name"]


def test_load_open_handle() -> None:
    """Test open text handles are read without recording a path."""
    handle = StringIO("a,b\n1,2\n")

    loaded = load_source(handle)

    assert loaded.path is None
    assert loaded.rows == [["a", "b"], ["1", "2"]]
    assert not handle.closed


def test_load_rows_in_memory() -> None:
    """Test in-memory rows pass through unchanged."""
    rows = [("a", "b"), ("1", "2")]

    assert load_source(rows).rows == rows
    assert load_source(iter(rows)).rows == rows
    assert load_source([]).rows == []


@pytest.mark.parametrize("source", [42, ["a", "b"], [1, 2], b"a,b"])
def test_load_invalid_source(source: object) -> None:
    """Test sources that are not rows of values are rejected."""
    with pytest.raises(InvalidSourceError, match="sequence of rows"):
        load_source(source)  # pyright: ignore[reportArgumentType]


def test_load_missing_file(tmp_path: Path) -> None:
    """Test a missing file surfaces the underlying OS error."""
    with pytest.raises(FileNotFoundError):
        load_source(tmp_path / "missing.csv")
