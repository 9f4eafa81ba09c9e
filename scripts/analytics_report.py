#!/usr/bin/env python3
"""
Analytics report for the Arachne scraping service.

Runs one dashboard fetch cycle and prints the summary cards, top domains and
recent scrapes as plain text. Handy from cron or when the web dashboard is
not deployed.

Example:
python scripts/analytics_report.py --days 7 --base-url http://localhost:8080
"""

import sys
import os
import argparse
import asyncio

# Add parent directory to path to allow importing app modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.schemas.analytics import TimeRange
from app.services.analytics.client import AnalyticsClient
from app.services.analytics.formatting import format_bytes, format_duration, format_percent
from app.services.analytics.orchestrator import AnalyticsDashboard
from app.services.analytics.presentation import build_view
from app.services.analytics.state import DashboardState, ViewStatus


def print_report(state: DashboardState) -> None:
    view = build_view(state)

    print(f"📊 Scrape analytics ({state.time_range.label.lower()})")
    print("=" * 60)
    for card in view.cards:
        caption = f"  ({card.caption})" if card.caption else ""
        print(f"{card.title:<16} {card.value}{caption}")
    for card in view.extra_stats:
        caption = f"  ({card.caption})" if card.caption else ""
        print(f"{card.title:<16} {card.value}{caption}")

    snapshot = state.snapshot
    if snapshot and snapshot.domains:
        print("\n🌐 Top domains")
        for domain in snapshot.domains:
            print(
                f"  {domain.domain:<32} {domain.scrapes_count:>6} scrapes  "
                f"{format_percent(domain.success_rate):>7}  "
                f"{format_duration(domain.avg_duration_seconds):>9}  "
                f"{format_bytes(domain.total_size_bytes):>10}"
            )

    if view.recent:
        print("\n🕒 Recent scrapes")
        for row in view.recent:
            marker = "✅" if row.positive else "❌"
            print(f"  {marker} {row.completed}  {row.duration:>9}  {row.size:>10}  {row.url}")
            if row.error:
                print(f"      ↳ {row.error}")


async def main(days: int, base_url: str) -> int:
    client = AnalyticsClient(base_url, timeout=settings.analytics_timeout_seconds)
    dashboard = AnalyticsDashboard(client, time_range=days)
    state = await dashboard.refresh()

    if state.status is not ViewStatus.LOADED:
        print(f"❌ {state.error}")
        return 1

    print_report(state)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print scrape analytics from the Arachne API")
    parser.add_argument(
        "--days",
        type=int,
        choices=[int(option) for option in TimeRange],
        default=settings.default_time_range_days,
        help="Time range for the time series (default: %(default)s)",
    )
    parser.add_argument(
        "--base-url",
        default=settings.scraper_api_root,
        help="Analytics API root, absolute (default: SCRAPER_API_URL)",
    )
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(main(args.days, args.base_url)))
