"""Classified CSV export."""

from __future__ import annotations

from pathlib import Path

from pan_quality.common.errors import StageError
from pan_quality.common.fs import read_json, write_csv
from pan_quality.pipeline.clean_classify import intermediate_path

CLASSIFIED_HEADERS = [
    "cleaned_value",
    "status",
    "occurrences",
    "reasons",
]


def _serialize_row(row: dict) -> dict:
    out = {}
    for key in CLASSIFIED_HEADERS:
        value = row.get(key)
        if value is None:
            out[key] = ""
        elif isinstance(value, (list, tuple)):
            out[key] = ";".join(value)
        else:
            out[key] = value
    return out


def classified_csv_path(dataset_config: dict, data_dir: Path) -> Path:
    return data_dir / "out" / dataset_config["output"]["classified_filename"]


def write_classified_csv(dataset_config: dict, data_dir: Path, rows: list[dict]) -> Path:
    out_path = classified_csv_path(dataset_config, data_dir)
    sorted_rows = sorted(rows, key=lambda row: row["cleaned_value"])
    write_csv(out_path, CLASSIFIED_HEADERS, [_serialize_row(row) for row in sorted_rows])
    return out_path


def run_export(dataset_name: str, dataset_config: dict, data_dir: Path) -> Path:
    source = intermediate_path(data_dir, dataset_name)
    if not source.exists():
        raise StageError(f"Missing classified intermediate: {source}")
    return write_classified_csv(dataset_config, data_dir, read_json(source).get("rows", []))
