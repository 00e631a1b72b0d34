"""Report stage: contract checks and per-dataset summary counts."""

from __future__ import annotations

from pathlib import Path

from pan_quality.common.constants import STATUS_INVALID, STATUS_VALID
from pan_quality.common.errors import ContractError, StageError
from pan_quality.common.fs import read_csv_rows, read_json, write_json
from pan_quality.pipeline.clean_classify import intermediate_path
from pan_quality.pipeline.export import CLASSIFIED_HEADERS, classified_csv_path


def report_path(data_dir: Path, dataset_name: str) -> Path:
    return data_dir / "out" / "reports" / f"{dataset_name}_report.json"


def summary_counts(intermediate: dict) -> dict[str, int]:
    total_rows = int(intermediate.get("raw_row_count", 0))
    row_status = intermediate.get("row_status_counts", {})
    status = intermediate.get("status_counts", {})
    valid_rows = int(row_status.get(STATUS_VALID, 0))
    invalid_rows = int(row_status.get(STATUS_INVALID, 0))
    return {
        "total_rows": total_rows,
        "valid_rows": valid_rows,
        "invalid_rows": invalid_rows,
        "missing_rows": total_rows - valid_rows - invalid_rows,
        "unique_values": int(intermediate.get("unique_values", 0)),
        "valid_values": int(status.get(STATUS_VALID, 0)),
        "invalid_values": int(status.get(STATUS_INVALID, 0)),
    }


def run_report(
    dataset_name: str,
    dataset_config: dict,
    data_dir: Path,
    run_id: str,
    run_date: str,
) -> Path:
    source = intermediate_path(data_dir, dataset_name)
    if not source.exists():
        raise StageError(f"Missing classified intermediate: {source}")
    csv_path = classified_csv_path(dataset_config, data_dir)
    if not csv_path.exists():
        raise StageError(f"Missing CSV input: {csv_path}")

    intermediate = read_json(source)
    header, exported_rows = read_csv_rows(csv_path)
    counts = summary_counts(intermediate)

    errors: list[str] = []
    warnings: list[str] = []

    if header != CLASSIFIED_HEADERS:
        errors.append("CLASSIFIED_HEADER_MISMATCH")
    if len(exported_rows) != counts["unique_values"]:
        errors.append("EXPORTED_ROW_COUNT_MISMATCH")
    if counts["missing_rows"] != int(intermediate.get("excluded_count", 0)):
        errors.append("MISSING_COUNT_MISMATCH")
    if counts["valid_values"] + counts["invalid_values"] != counts["unique_values"]:
        errors.append("STATUS_COUNT_MISMATCH")

    if errors:
        raise ContractError(";".join(errors))

    if counts["total_rows"] > 0 and counts["valid_rows"] == 0:
        warnings.append("NO_VALID_VALUES")
    if int(intermediate.get("duplicate_count", 0)) > 0:
        warnings.append("DUPLICATE_VALUES_PRESENT")
    if counts["missing_rows"] > 0:
        warnings.append("MISSING_VALUES_PRESENT")

    report_payload = {
        "dataset": dataset_name,
        "run_id": run_id,
        "run_date": run_date,
        "counts": counts,
        "quality": {
            "duplicate_rows": int(intermediate.get("duplicate_count", 0)),
            "valid_row_percent": 0.0
            if counts["total_rows"] == 0
            else round((counts["valid_rows"] / counts["total_rows"]) * 100, 2),
        },
        "invalid_reasons": intermediate.get("invalid_reasons", {}),
        "warnings": warnings,
        "errors": errors,
        "diagnostics": {
            "classified_header": header,
            "classified_filename": csv_path.name,
        },
    }

    out_path = report_path(data_dir, dataset_name)
    write_json(out_path, report_payload)
    return out_path
