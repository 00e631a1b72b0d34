"""UTC-focused helpers for deterministic run metadata."""

from __future__ import annotations

from datetime import date, datetime, timezone

from pan_quality.common.errors import ConfigError


def utc_today_iso() -> str:
    return datetime.now(tz=timezone.utc).date().isoformat()


def parse_run_date(value: str | None) -> str:
    if not value:
        return utc_today_iso()
    try:
        parsed = date.fromisoformat(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid run date: {value}") from exc
    return parsed.isoformat()


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")
