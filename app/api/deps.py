from typing import AsyncIterator

import httpx
from fastapi import Request

from app.core.config import settings
from app.services.analytics.client import AnalyticsClient
from app.services.analytics.orchestrator import DashboardRegistry, build_dashboards


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    Dependency yielding an outbound client for the proxy routes.
    Single attempt, transport default timeouts.
    """
    async with httpx.AsyncClient() as client:
        yield client


def get_analytics_dashboards(request: Request) -> DashboardRegistry:
    """
    Dependency returning one dashboard controller per time range.
    The analytics base comes from settings only; request headers never
    influence where analytics requests are sent.
    """
    dashboards = getattr(request.app.state, "analytics_dashboards", None)
    if dashboards is None:
        client = AnalyticsClient(settings.analytics_base_url, timeout=settings.analytics_timeout_seconds)
        dashboards = build_dashboards(client)
        request.app.state.analytics_dashboards = dashboards
    return dashboards
