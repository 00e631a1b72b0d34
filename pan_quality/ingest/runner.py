"""Ingest stage: load raw values from the configured source into a raw snapshot."""

from __future__ import annotations

from pathlib import Path

from pan_quality.common.errors import StageError
from pan_quality.common.fs import write_json
from pan_quality.common.http import HttpClient
from pan_quality.common.models import RawRecord
from pan_quality.ingest.csv_import import read_csv_values
from pan_quality.ingest.http_import import fetch_csv_values
from pan_quality.ingest.xlsx_import import read_xlsx_values


def raw_snapshot_path(data_dir: Path, dataset_name: str) -> Path:
    return data_dir / "raw" / f"{dataset_name}_raw.json"


def load_source_values(source: dict, *, http_settings: dict | None = None) -> tuple[str, list[str | None]]:
    source_type = source["type"]
    if source_type == "csv":
        path = Path(source["path"])
        return path.name, read_csv_values(path, source["column"])
    if source_type == "xlsx":
        path = Path(source["path"])
        return path.name, read_xlsx_values(path, source["column"], sheet=source.get("sheet"))
    if source_type == "http":
        with HttpClient.from_settings(http_settings) as client:
            return source["url"], fetch_csv_values(client, source["url"], source["column"])
    raise StageError(f"Unsupported source type: {source_type}")


def run_ingest(
    dataset_name: str,
    dataset_config: dict,
    data_dir: Path,
    run_id: str,
    run_date: str,
    *,
    http_settings: dict | None = None,
) -> dict:
    source = dataset_config["source"]
    source_name, values = load_source_values(source, http_settings=http_settings)

    records = [
        RawRecord(
            dataset=dataset_name,
            source_name=source_name,
            row_number=idx,
            raw_value=value,
            extract_date=run_date,
            run_id=run_id,
        )
        for idx, value in enumerate(values, start=1)
    ]

    payload = {
        "dataset": dataset_name,
        "run_id": run_id,
        "source_type": source["type"],
        "source_name": source_name,
        "row_count": len(records),
        "rows": [record.to_dict() for record in records],
    }
    write_json(raw_snapshot_path(data_dir, dataset_name), payload)
    return payload
