"""Shared fixtures: canned analytics payloads and fake scraper backends."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from app.schemas.analytics import AnalyticsSnapshot

BASE_URL = "http://arachne.test"


def summary_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "total_scrapes": 1234,
        "successful_scrapes": 1100,
        "failed_scrapes": 134,
        "success_rate": 89.14,
        "average_duration_seconds": 2.5,
        "fastest_scrape_seconds": 0.25,
        "slowest_scrape_seconds": 125,
        "largest_scrape_bytes": 1073741824,
        "total_data_bytes": 1536,
        "average_scrape_bytes": 512,
        "unique_urls": 321,
        "total_versions": 77,
        "urls_with_changes": 12,
    }
    payload.update(overrides)
    return payload


def timeseries_payload(days: int) -> list[dict[str, Any]]:
    return [
        {
            "date": f"2026-10-{day:02d}",
            "scrapes_count": 10 + day,
            "success_rate": 90.0,
            "avg_duration_seconds": 1.5,
            "total_data_bytes": 2048,
        }
        for day in range(1, min(days, 3) + 1)
    ]


def domains_payload() -> list[dict[str, Any]]:
    return [
        {
            "domain": "example.com",
            "scrapes_count": 40,
            "success_rate": 97.5,
            "avg_duration_seconds": 0.8,
            "total_size_bytes": 5 * 1024 * 1024,
        },
        {
            "domain": "news.example.org",
            "scrapes_count": 12,
            "success_rate": 50,
            "avg_duration_seconds": 75,
            "total_size_bytes": 0,
        },
    ]


def recent_payload() -> list[dict[str, Any]]:
    return [
        {
            "url": "https://example.com/a",
            "status": "completed",
            "duration_seconds": 0.42,
            "size_bytes": 2048,
            "completed_at": "2026-10-16T08:30:00Z",
        },
        {
            "url": "https://news.example.org/b",
            "status": "failed",
            "duration_seconds": 61,
            "size_bytes": 0,
            "completed_at": "2026-10-15T23:10:00Z",
            "error": "timeout after 60s",
        },
    ]


def analytics_backend(
    days_seen: list[int] | None = None,
    fail_paths: set[str] | None = None,
    summary: dict[str, Any] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Fake analytics API. Paths in fail_paths answer 503."""
    fail_paths = fail_paths or set()

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path in fail_paths:
            return httpx.Response(503, json={"detail": "unavailable"})
        if path == "/api/v1/analytics/summary":
            return httpx.Response(200, json=summary or summary_payload())
        if path == "/api/v1/analytics/timeseries":
            days = int(request.url.params["days"])
            if days_seen is not None:
                days_seen.append(days)
            return httpx.Response(200, json=timeseries_payload(days))
        if path == "/api/v1/analytics/domains":
            assert request.url.params["limit"] == "10"
            return httpx.Response(200, json=domains_payload())
        if path == "/api/v1/analytics/recent":
            assert request.url.params["limit"] == "20"
            return httpx.Response(200, json=recent_payload())
        return httpx.Response(404, json={"detail": "not found"})

    return handler


def make_snapshot(days: int = 30, **summary_overrides: Any) -> AnalyticsSnapshot:
    return AnalyticsSnapshot.model_validate(
        {
            "summary": summary_payload(**summary_overrides),
            "time_series": timeseries_payload(days),
            "domains": domains_payload(),
            "recent": recent_payload(),
        }
    )


def json_body(response: httpx.Response) -> Any:
    return json.loads(response.content)


@pytest.fixture()
def snapshot() -> AnalyticsSnapshot:
    return make_snapshot()
