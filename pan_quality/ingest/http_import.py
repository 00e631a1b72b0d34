"""Remote CSV import of raw PAN values."""

from __future__ import annotations

from pan_quality.common.http import HttpClient
from pan_quality.ingest.csv_import import parse_csv_text


def fetch_csv_values(client: HttpClient, url: str, column: str) -> list[str | None]:
    text = client.get_text(url)
    return parse_csv_text(text, column, origin=url)
