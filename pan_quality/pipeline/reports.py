"""Run report aggregation."""

from __future__ import annotations

from pathlib import Path

from pan_quality.common.fs import read_json, write_json
from pan_quality.pipeline.validate import report_path

TOTAL_KEYS = (
    "total_rows",
    "valid_rows",
    "invalid_rows",
    "missing_rows",
    "unique_values",
    "valid_values",
    "invalid_values",
)


def write_run_summary(data_dir: Path, run_id: str, run_date: str, datasets: list[str]) -> Path:
    dataset_reports = {}
    totals = {key: 0 for key in TOTAL_KEYS}
    warning_count = 0
    error_count = 0

    for dataset_name in datasets:
        path = report_path(data_dir, dataset_name)
        if not path.exists():
            dataset_reports[dataset_name] = {"status": "missing_report"}
            error_count += 1
            continue

        report = read_json(path)
        counts = report.get("counts", {})
        dataset_reports[dataset_name] = {
            "counts": counts,
            "warnings": report.get("warnings", []),
            "errors": report.get("errors", []),
        }

        for key in TOTAL_KEYS:
            totals[key] += int(counts.get(key, 0))

        warning_count += len(report.get("warnings", []))
        error_count += len(report.get("errors", []))

    status = "success"
    if error_count > 0:
        status = "error"
    elif warning_count > 0:
        status = "partial"

    summary_path = data_dir / "out" / "reports" / "run_summary.json"
    payload = {
        "run_id": run_id,
        "run_date": run_date,
        "status": status,
        "datasets": datasets,
        "totals": totals,
        "warning_count": warning_count,
        "error_count": error_count,
        "dataset_reports": dataset_reports,
    }
    write_json(summary_path, payload)
    return summary_path
