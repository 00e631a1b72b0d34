from __future__ import annotations

import pytest

from pan_quality.common.http import HttpClient, HttpRequestError, RetryConfig, RetryableHttpError
from pan_quality.ingest.http_import import fetch_csv_values


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text
        self.encoding = "utf-8"


def test_http_get_text_success(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(200, "pan\nAHGVE1276F\n"))

    assert client.get_text("https://example.com/pans.csv") == "pan\nAHGVE1276F\n"


def test_http_retryable_status_raises_retryable_error(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(503))

    with pytest.raises(RetryableHttpError):
        client.get_text("https://example.com/pans.csv")


def test_http_client_error_is_not_retried(monkeypatch):
    calls = []

    def fake_request(**_kwargs):
        calls.append(1)
        return FakeResponse(404)

    client = HttpClient(retry=RetryConfig(max_attempts=3, multiplier=0.01, max_wait=0.01))
    monkeypatch.setattr(client.session, "request", fake_request)

    with pytest.raises(HttpRequestError):
        client.get_text("https://example.com/pans.csv")
    assert len(calls) == 1


def test_http_retries_then_succeeds(monkeypatch):
    responses = [FakeResponse(502), FakeResponse(200, "pan_number\nabcdx1243f\n")]
    client = HttpClient(retry=RetryConfig(max_attempts=2, multiplier=0.01, max_wait=0.01), rate_per_sec=1000.0)
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: responses.pop(0))
    monkeypatch.setattr("time.sleep", lambda _seconds: None)

    assert fetch_csv_values(client, "https://example.com/pans.csv", "pan_number") == ["abcdx1243f"]


def test_http_client_from_settings():
    client = HttpClient.from_settings({"connect_timeout_seconds": 5, "max_attempts": 2})

    assert client.timeout.connect == 5.0
    assert client.retry.max_attempts == 2
    client.close()
