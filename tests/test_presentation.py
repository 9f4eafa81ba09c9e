from app.schemas.analytics import AnalyticsSummary, TimeRange
from app.services.analytics.presentation import (
    UNAVAILABLE_MESSAGE,
    build_status_breakdown,
    build_view,
)
from app.services.analytics.state import DashboardState, ViewStatus
from conftest import make_snapshot, summary_payload


def _loaded(**summary_overrides) -> DashboardState:
    return DashboardState(status=ViewStatus.LOADED, cycle=1, snapshot=make_snapshot(**summary_overrides))


def test_summary_cards_use_formatters():
    view = build_view(_loaded())
    cards = {card.title: card for card in view.cards}

    assert cards["Total Scrapes"].value == "1,234"
    assert cards["Success Rate"].value == "89.1%"
    assert cards["Success Rate"].caption == "1100 / 1234 successful"
    assert cards["Avg Duration"].value == "2.50s"
    assert cards["Avg Duration"].caption == "Fastest: 250ms"
    assert cards["Total Data"].value == "1.50 KB"
    assert cards["Total Data"].caption == "Avg: 512.00 B"


def test_extra_stats_row():
    extra = {card.title: card for card in build_view(_loaded()).extra_stats}

    assert extra["Largest Scrape"].value == "1.00 GB"
    assert extra["URLs with Changes"].value == "12"
    assert extra["URLs with Changes"].caption == "Total versions: 77"
    assert extra["Slowest Scrape"].value == "2m 5s"


def test_recent_rows_badges_and_formatting():
    rows = build_view(_loaded()).recent

    assert rows[0].positive and rows[0].status == "completed"
    assert rows[0].duration == "420ms"
    assert rows[0].size == "2.00 KB"
    assert rows[0].completed == "2026-10-16"
    assert not rows[1].positive
    assert rows[1].duration == "1m 1s"
    assert rows[1].size == "0 B"
    assert rows[1].error == "timeout after 60s"


def test_chart_payload():
    charts = build_view(_loaded()).charts

    assert charts["time_series"]["labels"] == ["2026-10-01", "2026-10-02", "2026-10-03"]
    assert charts["status"]["values"] == [1100, 134]
    assert charts["domains"]["labels"] == ["example.com", "news.example.org"]
    assert charts["domains"]["tooltips"][0] == {
        "success_rate": "97.5%",
        "avg_duration_seconds": "800ms",
        "total_size_bytes": "5.00 MB",
    }


def test_status_breakdown_percentages():
    summary = AnalyticsSummary.model_validate(summary_payload(successful_scrapes=3, failed_scrapes=1))
    slices = build_status_breakdown(summary)

    assert [(s.name, s.value, s.percent) for s in slices] == [("Successful", 3, "75%"), ("Failed", 1, "25%")]


def test_status_breakdown_without_scrapes():
    summary = AnalyticsSummary.model_validate(summary_payload(successful_scrapes=0, failed_scrapes=0))
    assert [s.percent for s in build_status_breakdown(summary)] == ["0%", "0%"]


def test_failed_view_carries_only_error():
    view = build_view(DashboardState(status=ViewStatus.FAILED, cycle=2, error="Connection refused"))

    assert view.error == "Connection refused"
    assert view.cards == []
    assert view.recent == []
    assert view.charts == {}


def test_failed_view_without_message_uses_default_text():
    view = build_view(DashboardState(status=ViewStatus.FAILED, cycle=2))
    assert view.error == UNAVAILABLE_MESSAGE


def test_loading_view_has_no_error():
    view = build_view(DashboardState(status=ViewStatus.LOADING, cycle=1))
    assert view.status == "loading"
    assert view.error is None


def test_time_range_options_mark_selection():
    view = build_view(DashboardState(time_range=TimeRange.LAST_90_DAYS))

    assert [(o["value"], o["label"], o["selected"]) for o in view.time_range_options] == [
        (7, "Last 7 days", False),
        (30, "Last 30 days", False),
        (90, "Last 90 days", True),
    ]
