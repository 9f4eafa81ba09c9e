from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from app.api.dashboard_html import render_analytics_page
from app.api.deps import get_analytics_dashboards
from app.core.config import settings
from app.services.analytics.client import coerce_time_range
from app.services.analytics.errors import InvalidTimeRangeError
from app.services.analytics.orchestrator import AnalyticsDashboard, DashboardRegistry
from app.services.analytics.presentation import build_view

router = APIRouter()

DAYS_QUERY = Query(None, description="Time range in days: 7, 30 or 90")


def _dashboard_for(dashboards: DashboardRegistry, days: Optional[int]) -> AnalyticsDashboard:
    """The dashboard for the requested range; the query string alone decides which one."""
    try:
        time_range = coerce_time_range(settings.default_time_range_days if days is None else days)
    except InvalidTimeRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return dashboards[time_range]


@router.get("", response_class=HTMLResponse)
async def analytics_page(
    days: Optional[int] = DAYS_QUERY,
    dashboards: DashboardRegistry = Depends(get_analytics_dashboards),
):
    """Scrape analytics dashboard: summary cards, charts and recent activity."""
    # Every page view mounts the dashboard and renders that cycle's own outcome
    state = await _dashboard_for(dashboards, days).refresh()
    return HTMLResponse(render_analytics_page(build_view(state)))


@router.get("/state")
async def analytics_state(
    days: Optional[int] = DAYS_QUERY,
    dashboards: DashboardRegistry = Depends(get_analytics_dashboards),
):
    """The dashboard view model as JSON."""
    state = await _dashboard_for(dashboards, days).refresh()
    return build_view(state).to_dict()


@router.post("/retry", response_class=HTMLResponse)
async def retry_analytics(
    days: Optional[int] = DAYS_QUERY,
    dashboards: DashboardRegistry = Depends(get_analytics_dashboards),
):
    """Re-run the fetch cycle for the requested time range and show its result."""
    state = await _dashboard_for(dashboards, days).retry()
    return HTMLResponse(render_analytics_page(build_view(state)))
