"""
Dashboard view state.

The view is an immutable DashboardState replaced wholesale by reduce().
Each fetch cycle carries a sequence number and only the most recently
started cycle may commit its outcome.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from app.schemas.analytics import AnalyticsSnapshot, AnalyticsSummary, TimeRange


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class DashboardState:
    status: ViewStatus = ViewStatus.IDLE
    time_range: TimeRange = TimeRange.LAST_30_DAYS
    cycle: int = 0
    snapshot: Optional[AnalyticsSnapshot] = None
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status is ViewStatus.LOADING

    @property
    def summary(self) -> Optional[AnalyticsSummary]:
        return self.snapshot.summary if self.snapshot else None


@dataclass(frozen=True)
class CycleStarted:
    cycle: int
    time_range: TimeRange


@dataclass(frozen=True)
class CycleSucceeded:
    cycle: int
    snapshot: AnalyticsSnapshot


@dataclass(frozen=True)
class CycleFailed:
    cycle: int
    message: str


CycleEvent = Union[CycleStarted, CycleSucceeded, CycleFailed]


def is_stale(state: DashboardState, event: CycleEvent) -> bool:
    return not isinstance(event, CycleStarted) and event.cycle != state.cycle


def reduce(state: DashboardState, event: CycleEvent) -> DashboardState:
    if isinstance(event, CycleStarted):
        return DashboardState(
            status=ViewStatus.LOADING,
            time_range=event.time_range,
            cycle=event.cycle,
        )

    if is_stale(state, event):
        return state

    if isinstance(event, CycleSucceeded):
        return replace(state, status=ViewStatus.LOADED, snapshot=event.snapshot, error=None)

    if isinstance(event, CycleFailed):
        return replace(state, status=ViewStatus.FAILED, snapshot=None, error=event.message)

    raise TypeError(f"Unknown dashboard event: {event!r}")
