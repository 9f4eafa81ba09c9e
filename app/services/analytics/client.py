import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from app.core.metrics import observe_api_request
from app.schemas.analytics import AnalyticsSnapshot, TimeRange
from app.services.analytics.errors import AnalyticsFetchError, InvalidTimeRangeError

logger = logging.getLogger("analytics")

# === Configuration ===
TIMEOUT_SECONDS = 10
DOMAINS_LIMIT = 10
RECENT_LIMIT = 20

SUMMARY_PATH = "/api/v1/analytics/summary"
TIMESERIES_PATH = "/api/v1/analytics/timeseries"
DOMAINS_PATH = "/api/v1/analytics/domains"
RECENT_PATH = "/api/v1/analytics/recent"


def coerce_time_range(days) -> TimeRange:
    try:
        return TimeRange(int(days))
    except (TypeError, ValueError):
        raise InvalidTimeRangeError(days) from None


class AnalyticsClient:
    """
    Reads the pre-aggregated analytics endpoints of the scraper API.

    Pass an existing httpx.AsyncClient to share a connection pool (or a mock
    transport in tests); otherwise a client is opened per fetch cycle.
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = TIMEOUT_SECONDS,
    ):
        base = base_url.strip()
        self.base_url = base[:-1] if base.endswith("/") else base
        self._client = client
        self._timeout = timeout

    def build_requests(self, time_range: TimeRange) -> List[Tuple[str, Dict[str, Any]]]:
        """The four (url, params) pairs of one fetch cycle, in commit order."""
        return [
            (f"{self.base_url}{SUMMARY_PATH}", {}),
            (f"{self.base_url}{TIMESERIES_PATH}", {"days": int(time_range)}),
            (f"{self.base_url}{DOMAINS_PATH}", {"limit": DOMAINS_LIMIT}),
            (f"{self.base_url}{RECENT_PATH}", {"limit": RECENT_LIMIT}),
        ]

    async def fetch_snapshot(self, time_range) -> AnalyticsSnapshot:
        """
        Fetch summary, time series, domains and recent scrapes concurrently.

        All four requests are dispatched before any is awaited and the call
        only returns once every one of them succeeded. Any transport error,
        non-success status, malformed body or schema mismatch raises.
        """
        selected = coerce_time_range(time_range)
        requests = self.build_requests(selected)

        if self._client is not None:
            responses = await self._gather(self._client, requests)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                responses = await self._gather(client, requests)

        failures = [
            (str(response.request.url.path), response.status_code)
            for response in responses
            if not response.is_success
        ]
        if failures:
            logger.warning("Analytics endpoints failed: %s", failures)
            raise AnalyticsFetchError(failures)

        summary, time_series, domains, recent = (response.json() for response in responses)
        return AnalyticsSnapshot.model_validate(
            {
                "summary": summary,
                "time_series": time_series,
                "domains": domains,
                "recent": recent,
            }
        )

    async def _gather(
        self,
        client: httpx.AsyncClient,
        requests: List[Tuple[str, Dict[str, Any]]],
    ) -> List[httpx.Response]:
        # Wait for every request to settle before inspecting any outcome
        results = await asyncio.gather(
            *(self._get(client, url, params) for url, params in requests),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def _get(self, client: httpx.AsyncClient, url: str, params: Dict[str, Any]) -> httpx.Response:
        endpoint = url[len(self.base_url):]
        try:
            response = await client.get(url, params=params or None)
        except httpx.HTTPError as e:
            observe_api_request(endpoint, type(e).__name__)
            raise
        observe_api_request(endpoint, str(response.status_code))
        logger.debug("GET %s -> %s", response.request.url, response.status_code)
        return response
