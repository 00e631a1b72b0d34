from pathlib import Path

import pytest
from openpyxl import Workbook

from pan_quality.common.errors import StageError
from pan_quality.ingest.csv_import import parse_csv_text, read_csv_values
from pan_quality.ingest.xlsx_import import read_xlsx_values


def test_read_csv_values_keeps_blank_and_short_rows_apart(tmp_path: Path):
    path = tmp_path / "pans.csv"
    path.write_text("id,pan_number\n1,ahgve1276f\n2,\n3\n4,  INVALID \n", encoding="utf-8")

    assert read_csv_values(path, "pan_number") == ["ahgve1276f", "", None, "  INVALID "]


def test_read_csv_values_strips_bom_and_header_whitespace(tmp_path: Path):
    path = tmp_path / "pans.csv"
    path.write_text("\ufeffid, pan_number \n1,AHGVE1276F\n", encoding="utf-8")

    assert read_csv_values(path, "pan_number") == ["AHGVE1276F"]


def test_read_csv_values_rejects_unknown_column(tmp_path: Path):
    path = tmp_path / "pans.csv"
    path.write_text("id,pan\n1,AHGVE1276F\n", encoding="utf-8")

    with pytest.raises(StageError):
        read_csv_values(path, "pan_number")


def test_read_csv_values_requires_file(tmp_path: Path):
    with pytest.raises(StageError):
        read_csv_values(tmp_path / "missing.csv", "pan_number")


def test_parse_csv_text_handles_crlf():
    assert parse_csv_text("pan_number\r\nAHGVE1276F\r\n", "pan_number", origin="memory") == ["AHGVE1276F"]


def _write_workbook(path: Path, rows: list[tuple], *, title: str = "Sheet1") -> None:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = title
    for row in rows:
        worksheet.append(row)
    workbook.save(path)


def test_read_xlsx_values_reads_column_by_header(tmp_path: Path):
    path = tmp_path / "pans.xlsx"
    _write_workbook(
        path,
        [
            ("id", "pan_number"),
            (1, "ahgve1276f"),
            (2, None),
            (3, " AHGVE1276F "),
            (4, 12345),
        ],
    )

    assert read_xlsx_values(path, "pan_number") == ["ahgve1276f", None, " AHGVE1276F ", "12345"]


def test_read_xlsx_values_selects_named_sheet(tmp_path: Path):
    path = tmp_path / "pans.xlsx"
    workbook = Workbook()
    workbook.active.append(("other",))
    second = workbook.create_sheet("PAN")
    second.append(("pan_number",))
    second.append(("ABCDX1243F",))
    workbook.save(path)

    assert read_xlsx_values(path, "pan_number", sheet="PAN") == ["ABCDX1243F"]


def test_read_xlsx_values_rejects_unknown_sheet_and_column(tmp_path: Path):
    path = tmp_path / "pans.xlsx"
    _write_workbook(path, [("pan",), ("AHGVE1276F",)])

    with pytest.raises(StageError):
        read_xlsx_values(path, "pan", sheet="missing")
    with pytest.raises(StageError):
        read_xlsx_values(path, "pan_number")


def test_read_csv_values_single_column_keeps_blank_lines(tmp_path: Path):
    path = tmp_path / "pans.csv"
    path.write_text("pan_number\nAHGVE1276F\n\ninvalid\n", encoding="utf-8")

    assert read_csv_values(path, "pan_number") == ["AHGVE1276F", None, "invalid"]


def test_read_xlsx_values_single_column_keeps_empty_cells(tmp_path: Path):
    path = tmp_path / "pans.xlsx"
    workbook = Workbook()
    worksheet = workbook.active
    worksheet["A1"] = "pan_number"
    worksheet["A2"] = "AHGVE1276F"
    worksheet["A4"] = "invalid"
    workbook.save(path)

    assert read_xlsx_values(path, "pan_number") == ["AHGVE1276F", None, "invalid"]


def test_read_xlsx_values_drops_trailing_empty_rows(tmp_path: Path):
    path = tmp_path / "pans.xlsx"
    _write_workbook(path, [("pan_number", "note"), ("AHGVE1276F", None), (None, None), (None, None)])

    assert read_xlsx_values(path, "pan_number") == ["AHGVE1276F"]
