"""Excel workbook import of raw PAN values."""

from __future__ import annotations

from pathlib import Path

from openpyxl import load_workbook

from pan_quality.common.errors import StageError


def _cell_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def read_xlsx_values(path: Path, column: str, *, sheet: str | None = None) -> list[str | None]:
    """Read one column of a workbook, located by its header in the first row.

    Cells are returned as text without trimming; empty cells stay ``None`` so
    the cleaning step can count them as missing. Empty rows trailing the
    last populated row are dropped.
    """
    if not path.exists():
        raise StageError(f"Missing workbook input: {path}")

    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if sheet is None:
            worksheet = workbook.worksheets[0]
        elif sheet in workbook.sheetnames:
            worksheet = workbook[sheet]
        else:
            raise StageError(f"Sheet {sheet!r} not found in {path}")

        rows = worksheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            raise StageError(f"Workbook sheet is empty: {path}")

        names = [(_cell_text(cell) or "").strip() for cell in header]
        if column not in names:
            raise StageError(f"Column {column!r} not found in {path}")
        index = names.index(column)

        values: list[str | None] = []
        populated = 0
        for row in rows:
            values.append(_cell_text(row[index]) if index < len(row) else None)
            if any(cell is not None for cell in row):
                populated = len(values)
        return values[:populated]
    finally:
        workbook.close()
