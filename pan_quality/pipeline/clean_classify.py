"""Clean raw PAN values and classify each distinct cleaned value."""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from pan_quality.common.constants import REASON_CODES, STATUSES, STATUS_INVALID, STATUS_VALID
from pan_quality.common.errors import StageError
from pan_quality.common.fs import read_json, write_json
from pan_quality.common.models import ClassificationResult, CleanedBatch
from pan_quality.common.pan import explain_pan
from pan_quality.ingest.runner import raw_snapshot_path


def clean_value(raw: str | None) -> str | None:
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    return cleaned.upper()


def clean_raw_values(raw_values: Iterable[str | None]) -> CleanedBatch:
    """Trim, uppercase and deduplicate raw values.

    Null and blank values are counted as excluded. ``values`` keeps the first
    seen order of each distinct cleaned value.
    """
    total = 0
    excluded = 0
    occurrences: dict[str, int] = {}
    for raw in raw_values:
        total += 1
        cleaned = clean_value(raw)
        if cleaned is None:
            excluded += 1
            continue
        occurrences[cleaned] = occurrences.get(cleaned, 0) + 1

    return CleanedBatch(total=total, excluded=excluded, values=list(occurrences), occurrences=occurrences)


def classify_value(value: str) -> ClassificationResult:
    reasons = tuple(explain_pan(value))
    status = STATUS_INVALID if reasons else STATUS_VALID
    return ClassificationResult(cleaned_value=value, status=status, reasons=reasons)


def classify_values(values: list[str], *, workers: int = 1) -> list[ClassificationResult]:
    if workers <= 1 or len(values) < 2:
        return [classify_value(value) for value in values]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(classify_value, values))


def clean_and_classify(
    raw_values: Iterable[str | None], *, workers: int = 1
) -> tuple[list[ClassificationResult], int]:
    batch = clean_raw_values(raw_values)
    return classify_values(batch.values, workers=workers), batch.excluded


def intermediate_path(data_dir: Path, dataset_name: str) -> Path:
    return data_dir / "intermediate" / f"{dataset_name}_classified.json"


def run_classify(dataset_name: str, data_dir: Path, run_id: str, *, workers: int = 1) -> dict:
    raw_path = raw_snapshot_path(data_dir, dataset_name)
    if not raw_path.exists():
        raise StageError(f"Missing raw snapshot: {raw_path}")

    raw_rows = read_json(raw_path).get("rows", [])
    batch = clean_raw_values(row.get("raw_value") for row in raw_rows)
    results = classify_values(batch.values, workers=workers)

    status_counts = {status: 0 for status in STATUSES}
    row_status_counts = {status: 0 for status in STATUSES}
    invalid_reasons: Counter[str] = Counter()
    rows: list[dict] = []

    for result in results:
        occurrences = batch.occurrences[result.cleaned_value]
        status_counts[result.status] += 1
        row_status_counts[result.status] += occurrences
        invalid_reasons.update(result.reasons)

        row = result.to_dict()
        row["occurrences"] = occurrences
        rows.append(row)

    payload = {
        "dataset": dataset_name,
        "run_id": run_id,
        "raw_row_count": batch.total,
        "excluded_count": batch.excluded,
        "duplicate_count": batch.duplicates,
        "unique_values": len(results),
        "status_counts": status_counts,
        "row_status_counts": row_status_counts,
        "invalid_reasons": {code: invalid_reasons[code] for code in REASON_CODES},
        "rows": rows,
    }
    write_json(intermediate_path(data_dir, dataset_name), payload)
    return payload
