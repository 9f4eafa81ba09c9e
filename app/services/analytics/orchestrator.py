import logging
from time import perf_counter
from typing import Dict, Optional

from app.core.metrics import observe_fetch_cycle, observe_stale_result
from app.schemas.analytics import TimeRange
from app.services.analytics.client import AnalyticsClient, coerce_time_range
from app.services.analytics.errors import describe_failure
from app.services.analytics.state import (
    CycleEvent,
    CycleFailed,
    CycleStarted,
    CycleSucceeded,
    DashboardState,
    ViewStatus,
    is_stale,
    reduce,
)

DashboardRegistry = Dict[TimeRange, "AnalyticsDashboard"]

analytics_logger = logging.getLogger("analytics")


def _log(cycle: Optional[int], message: str, level: int = logging.INFO) -> None:
    prefix = f"[cycle:{cycle}] " if cycle else ""
    analytics_logger.log(level, "%s%s", prefix, message)


class AnalyticsDashboard:
    """
    Owns the dashboard view state and runs fetch cycles against the analytics API.

    A cycle runs on mount (ensure_loaded), on time range change and on retry.
    There is no polling. The state is only ever written through reduce(), so
    when cycles overlap the result of a superseded cycle is dropped instead
    of overwriting newer data.
    """

    def __init__(self, client: AnalyticsClient, time_range=TimeRange.LAST_30_DAYS):
        self._client = client
        self.time_range = coerce_time_range(time_range)
        self.retry_count = 0
        self._issued = 0
        self._state = DashboardState(time_range=self.time_range)

    @property
    def state(self) -> DashboardState:
        return self._state

    def dispatch(self, event: CycleEvent) -> DashboardState:
        if is_stale(self._state, event):
            observe_stale_result()
            _log(event.cycle, f"Discarding stale result (latest cycle is {self._state.cycle})", logging.DEBUG)
        self._state = reduce(self._state, event)
        return self._state

    async def ensure_loaded(self) -> DashboardState:
        if self._state.status is ViewStatus.IDLE:
            return await self.refresh()
        return self._state

    async def select_time_range(self, days) -> DashboardState:
        selected = coerce_time_range(days)
        if selected == self.time_range and self._state.status is not ViewStatus.IDLE:
            return self._state
        self.time_range = selected
        return await self.refresh()

    async def retry(self) -> DashboardState:
        self.retry_count += 1
        _log(None, f"Retry #{self.retry_count} requested")
        return await self.refresh()

    async def refresh(self) -> DashboardState:
        self._issued += 1
        cycle = self._issued
        time_range = self.time_range

        loading = self.dispatch(CycleStarted(cycle=cycle, time_range=time_range))
        _log(cycle, f"Fetching analytics ({time_range.label.lower()})")
        started = perf_counter()

        try:
            snapshot = await self._client.fetch_snapshot(time_range)
        except Exception as e:
            message = describe_failure(e)
            observe_fetch_cycle("error", perf_counter() - started)
            _log(cycle, f"Failed to fetch analytics: {e!r}", logging.ERROR)
            outcome = CycleFailed(cycle=cycle, message=message)
        else:
            observe_fetch_cycle("success", perf_counter() - started)
            _log(
                cycle,
                f"Fetched analytics: {len(snapshot.time_series)} days, "
                f"{len(snapshot.domains)} domains, {len(snapshot.recent)} recent scrapes",
            )
            outcome = CycleSucceeded(cycle=cycle, snapshot=snapshot)

        self.dispatch(outcome)
        # This cycle's own result, even when a newer cycle has replaced the shared state
        return reduce(loading, outcome)


def build_dashboards(client: AnalyticsClient) -> DashboardRegistry:
    """One dashboard per time range, so viewers of one range never see another's state."""
    return {time_range: AnalyticsDashboard(client, time_range=time_range) for time_range in TimeRange}
