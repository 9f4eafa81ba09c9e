"""
Render-ready view of the dashboard state.

Turns a DashboardState into plain cards, rows and chart series so the HTML
page, the JSON endpoint and the CLI report all show the same numbers.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from app.schemas.analytics import (
    AnalyticsSnapshot,
    AnalyticsSummary,
    DomainStats,
    RecentScrape,
    TimeRange,
)
from app.services.analytics.formatting import (
    format_bytes,
    format_count,
    format_date,
    format_duration,
    format_percent,
)
from app.services.analytics.state import DashboardState, ViewStatus

UNAVAILABLE_MESSAGE = "Analytics data is not available right now."


@dataclass
class SummaryCard:
    title: str
    value: str
    caption: Optional[str] = None


@dataclass
class StatusSlice:
    name: str
    value: int
    percent: str


@dataclass
class RecentRow:
    url: str
    status: str
    positive: bool
    duration: str
    size: str
    completed: str
    error: Optional[str] = None


@dataclass
class DashboardView:
    status: str
    time_range: int
    time_range_options: List[Dict[str, Any]]
    error: Optional[str] = None
    cards: List[SummaryCard] = field(default_factory=list)
    status_breakdown: List[StatusSlice] = field(default_factory=list)
    extra_stats: List[SummaryCard] = field(default_factory=list)
    recent: List[RecentRow] = field(default_factory=list)
    charts: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_summary_cards(summary: AnalyticsSummary) -> List[SummaryCard]:
    return [
        SummaryCard("Total Scrapes", format_count(summary.total_scrapes)),
        SummaryCard(
            "Success Rate",
            format_percent(summary.success_rate),
            f"{summary.successful_scrapes} / {summary.total_scrapes} successful",
        ),
        SummaryCard(
            "Avg Duration",
            format_duration(summary.average_duration_seconds),
            f"Fastest: {format_duration(summary.fastest_scrape_seconds)}",
        ),
        SummaryCard(
            "Total Data",
            format_bytes(summary.total_data_bytes),
            f"Avg: {format_bytes(summary.average_scrape_bytes)}",
        ),
    ]


def build_status_breakdown(summary: AnalyticsSummary) -> List[StatusSlice]:
    total = summary.successful_scrapes + summary.failed_scrapes
    slices = []
    for name, value in (("Successful", summary.successful_scrapes), ("Failed", summary.failed_scrapes)):
        share = round(value / total * 100) if total else 0
        slices.append(StatusSlice(name=name, value=value, percent=f"{share}%"))
    return slices


def build_extra_stats(summary: AnalyticsSummary) -> List[SummaryCard]:
    return [
        SummaryCard("Largest Scrape", format_bytes(summary.largest_scrape_bytes)),
        SummaryCard(
            "URLs with Changes",
            str(summary.urls_with_changes),
            f"Total versions: {summary.total_versions}",
        ),
        SummaryCard("Slowest Scrape", format_duration(summary.slowest_scrape_seconds)),
    ]


def build_recent_rows(recent: List[RecentScrape]) -> List[RecentRow]:
    return [
        RecentRow(
            url=scrape.url,
            status=scrape.status,
            positive=scrape.is_success,
            duration=format_duration(scrape.duration_seconds),
            size=format_bytes(scrape.size_bytes),
            completed=format_date(scrape.completed_at),
            error=scrape.error,
        )
        for scrape in recent
    ]


def _domain_tooltip(domain: DomainStats) -> Dict[str, str]:
    return {
        "success_rate": format_percent(domain.success_rate),
        "avg_duration_seconds": format_duration(domain.avg_duration_seconds),
        "total_size_bytes": format_bytes(domain.total_size_bytes),
    }


def build_chart_payload(snapshot: AnalyticsSnapshot) -> Dict[str, Any]:
    summary = snapshot.summary
    return {
        "time_series": {
            "labels": [point.date for point in snapshot.time_series],
            "scrapes": [point.scrapes_count for point in snapshot.time_series],
            "success_rate": [point.success_rate for point in snapshot.time_series],
        },
        "status": {
            "labels": ["Successful", "Failed"],
            "values": [summary.successful_scrapes, summary.failed_scrapes],
        },
        "domains": {
            "labels": [domain.domain for domain in snapshot.domains],
            "scrapes": [domain.scrapes_count for domain in snapshot.domains],
            "tooltips": [_domain_tooltip(domain) for domain in snapshot.domains],
        },
    }


def build_view(state: DashboardState) -> DashboardView:
    view = DashboardView(
        status=state.status.value,
        time_range=int(state.time_range),
        time_range_options=[
            {"value": int(option), "label": option.label, "selected": option == state.time_range}
            for option in TimeRange
        ],
    )

    if state.status is ViewStatus.LOADING:
        return view

    snapshot = state.snapshot
    if state.status is not ViewStatus.LOADED or snapshot is None:
        view.error = state.error or UNAVAILABLE_MESSAGE
        return view

    view.cards = build_summary_cards(snapshot.summary)
    view.status_breakdown = build_status_breakdown(snapshot.summary)
    view.extra_stats = build_extra_stats(snapshot.summary)
    view.recent = build_recent_rows(snapshot.recent)
    view.charts = build_chart_payload(snapshot)
    return view
