from dataclasses import FrozenInstanceError

import pytest

from app.schemas.analytics import TimeRange
from app.services.analytics.state import (
    CycleFailed,
    CycleStarted,
    CycleSucceeded,
    DashboardState,
    ViewStatus,
    reduce,
)
from conftest import make_snapshot


def _started(cycle: int = 1, time_range: TimeRange = TimeRange.LAST_30_DAYS) -> DashboardState:
    return reduce(DashboardState(), CycleStarted(cycle=cycle, time_range=time_range))


def test_initial_state_is_idle_and_empty():
    state = DashboardState()
    assert state.status is ViewStatus.IDLE
    assert state.summary is None
    assert not state.loading


def test_start_enters_loading_and_clears_error():
    failed = reduce(_started(), CycleFailed(cycle=1, message="boom"))
    state = reduce(failed, CycleStarted(cycle=2, time_range=TimeRange.LAST_7_DAYS))

    assert state.loading
    assert state.error is None
    assert state.snapshot is None
    assert state.time_range is TimeRange.LAST_7_DAYS
    assert state.cycle == 2


def test_success_commits_snapshot():
    snapshot = make_snapshot()
    state = reduce(_started(), CycleSucceeded(cycle=1, snapshot=snapshot))

    assert state.status is ViewStatus.LOADED
    assert state.snapshot is snapshot
    assert state.summary.total_scrapes == 1234
    assert not state.loading


def test_failure_clears_summary_and_records_message():
    loaded = reduce(_started(), CycleSucceeded(cycle=1, snapshot=make_snapshot()))
    restarted = reduce(loaded, CycleStarted(cycle=2, time_range=TimeRange.LAST_30_DAYS))
    state = reduce(restarted, CycleFailed(cycle=2, message="One or more analytics requests failed"))

    assert state.status is ViewStatus.FAILED
    assert state.summary is None
    assert state.error == "One or more analytics requests failed"
    assert not state.loading


@pytest.mark.parametrize(
    "event",
    [
        CycleSucceeded(cycle=1, snapshot=make_snapshot()),
        CycleFailed(cycle=1, message="late failure"),
    ],
)
def test_outcome_of_superseded_cycle_is_ignored(event):
    current = reduce(_started(cycle=1), CycleStarted(cycle=2, time_range=TimeRange.LAST_90_DAYS))

    assert reduce(current, event) is current


def test_state_is_immutable():
    with pytest.raises(FrozenInstanceError):
        DashboardState().status = ViewStatus.LOADED
