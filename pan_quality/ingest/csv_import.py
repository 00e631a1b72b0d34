"""CSV import of raw PAN values."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

from pan_quality.common.errors import StageError


def parse_csv_values(lines: Iterable[str], column: str, *, origin: str) -> list[str | None]:
    reader = csv.reader(lines)
    header = next(reader, None)
    fieldnames = [name.strip() for name in (header or [])]
    if column not in fieldnames:
        raise StageError(f"Column {column!r} not found in {origin}")
    index = fieldnames.index(column)

    # A blank line is an empty cell in a single-column file; short rows have no cell.
    return [row[index] if index < len(row) else None for row in reader]


def read_csv_values(path: Path, column: str) -> list[str | None]:
    if not path.exists():
        raise StageError(f"Missing CSV input: {path}")
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        return parse_csv_values(f, column, origin=str(path))


def parse_csv_text(text: str, column: str, *, origin: str) -> list[str | None]:
    return parse_csv_values(io.StringIO(text, newline=""), column, origin=origin)
