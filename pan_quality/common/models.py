"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class RawRecord:
    dataset: str
    source_name: str
    row_number: int
    raw_value: str | None
    extract_date: str
    run_id: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CleanedBatch:
    total: int
    excluded: int
    values: list[str]
    occurrences: dict[str, int]

    @property
    def duplicates(self) -> int:
        return self.total - self.excluded - len(self.values)


@dataclass(frozen=True)
class ClassificationResult:
    cleaned_value: str
    status: str
    reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "cleaned_value": self.cleaned_value,
            "status": self.status,
            "reasons": list(self.reasons),
        }
