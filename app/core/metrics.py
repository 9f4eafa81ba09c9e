import os
from typing import Tuple

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

try:
    from prometheus_client import multiprocess
except Exception:  # pragma: no cover
    multiprocess = None


def _label(value: str) -> str:
    cleaned = (value or "unknown").strip().lower()
    return cleaned[:120] if cleaned else "unknown"


ANALYTICS_FETCH_CYCLES_TOTAL = Counter(
    "analytics_fetch_cycles_total",
    "Dashboard fetch cycles by outcome",
    labelnames=("status",),
)

ANALYTICS_FETCH_CYCLE_DURATION_SECONDS = Histogram(
    "analytics_fetch_cycle_duration_seconds",
    "Fetch cycle duration, from dispatch until all four responses settled",
    labelnames=("status",),
    buckets=(0.05, 0.1, 0.2, 0.5, 1, 2, 4, 6, 10, 20, 40),
)

ANALYTICS_API_REQUESTS_TOTAL = Counter(
    "analytics_api_requests_total",
    "Analytics API requests by endpoint/status code",
    labelnames=("endpoint", "status_code"),
)

ANALYTICS_STALE_RESULTS_TOTAL = Counter(
    "analytics_stale_results_total",
    "Fetch cycle results discarded because a newer cycle was issued",
)

PROXY_REQUESTS_TOTAL = Counter(
    "proxy_requests_total",
    "Proxied requests to the scraper backend by route/outcome",
    labelnames=("route", "outcome"),
)


def observe_fetch_cycle(status: str, duration_seconds: float) -> None:
    status_label = _label(status)
    ANALYTICS_FETCH_CYCLES_TOTAL.labels(status=status_label).inc()
    ANALYTICS_FETCH_CYCLE_DURATION_SECONDS.labels(status=status_label).observe(max(duration_seconds, 0.0))


def observe_api_request(endpoint: str, status_code: str) -> None:
    ANALYTICS_API_REQUESTS_TOTAL.labels(
        endpoint=_label(endpoint),
        status_code=_label(str(status_code)),
    ).inc()


def observe_stale_result() -> None:
    ANALYTICS_STALE_RESULTS_TOTAL.inc()


def observe_proxy_request(route: str, outcome: str) -> None:
    PROXY_REQUESTS_TOTAL.labels(route=_label(route), outcome=_label(outcome)).inc()


def render_metrics() -> Tuple[bytes, str]:
    """
    Render Prometheus metrics.
    Supports multiprocess mode when PROMETHEUS_MULTIPROC_DIR is configured.
    """
    multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR", "").strip()
    if multiproc_dir and multiprocess is not None:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return generate_latest(registry), CONTENT_TYPE_LATEST

    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
