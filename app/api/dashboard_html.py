import json
from html import escape
from string import Template
from typing import Iterable

from app.services.analytics.presentation import DashboardView, RecentRow, SummaryCard

ANALYTICS_PAGE = Template("""
<!DOCTYPE html>
<html lang="en" class="dark">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Arachne | Scrape Analytics</title>
    <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
    <script src="https://cdn.tailwindcss.com"></script>
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&family=JetBrains+Mono:wght@400;700&display=swap" rel="stylesheet">
    <style>
        body { background-color: #030712; color: #f3f4f6; font-family: 'Inter', sans-serif; }
        .glass-panel {
            background: rgba(255, 255, 255, 0.05);
            backdrop-filter: blur(12px);
            -webkit-backdrop-filter: blur(12px);
            border: 1px solid rgba(255, 255, 255, 0.1);
            box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1), 0 2px 4px -1px rgba(0, 0, 0, 0.06);
        }
        .stat-value { font-family: 'JetBrains Mono', monospace; letter-spacing: -0.05em; }
        .chart-container { position: relative; height: 300px; width: 100%; }
    </style>
</head>
<body class="min-h-screen antialiased pb-12">
    <main class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-8 space-y-8">

        <!-- Header -->
        <div class="flex items-center justify-between">
            <div>
                <h1 class="text-3xl font-bold tracking-tight text-white">Scrape Analytics</h1>
                <p class="mt-1 text-sm text-gray-400">Performance of the Arachne scraping service</p>
            </div>
            <form method="get" action="/analytics">
                <select name="days" onchange="this.form.submit()"
                        class="rounded-lg border border-white/10 bg-gray-900 px-4 py-2 text-sm text-white">
$time_range_options
                </select>
                <noscript><button type="submit" class="ml-2 text-sm text-gray-300">Apply</button></noscript>
            </form>
        </div>

$body
    </main>
</body>
</html>
""")

LOADING_PANEL = """
        <div class="glass-panel rounded-xl p-8 text-center">
            <p class="text-gray-300 animate-pulse">Loading analytics&hellip;</p>
        </div>
"""

ERROR_PANEL = Template("""
        <div class="glass-panel rounded-xl p-8 text-center space-y-4">
            <h2 class="text-xl font-semibold text-white">Unable to load analytics</h2>
            <p class="text-red-200">$message</p>
            <form method="post" action="/analytics/retry?days=$days">
                <button type="submit"
                        class="rounded-md bg-blue-600 px-4 py-2 text-sm font-medium text-white hover:bg-blue-500">
                    Retry
                </button>
            </form>
        </div>
""")

LOADED_BODY = Template("""
        <!-- Summary Cards -->
        <div class="grid grid-cols-1 md:grid-cols-2 lg:grid-cols-4 gap-6">
$cards
        </div>

        <!-- Charts Row -->
        <div class="grid grid-cols-1 lg:grid-cols-2 gap-6">
            <div class="glass-panel rounded-xl p-6">
                <h2 class="text-lg font-semibold text-white mb-4">Scraping Activity</h2>
                <div class="chart-container"><canvas id="timeSeriesChart"></canvas></div>
            </div>
            <div class="glass-panel rounded-xl p-6">
                <h2 class="text-lg font-semibold text-white mb-4">Success vs Failed</h2>
                <div class="chart-container"><canvas id="statusChart"></canvas></div>
                <div class="mt-4 grid grid-cols-2 gap-4 text-center">
$status_breakdown
                </div>
            </div>
        </div>

        <!-- Top Domains -->
        <div class="glass-panel rounded-xl p-6">
            <h2 class="text-lg font-semibold text-white mb-4">Top Domains</h2>
            <div class="chart-container"><canvas id="domainsChart"></canvas></div>
        </div>

        <!-- Recent Scrapes -->
        <div class="glass-panel rounded-xl p-6">
            <h2 class="text-lg font-semibold text-white mb-4">Recent Scrapes</h2>
            <div class="overflow-x-auto">
                <table class="min-w-full text-sm">
                    <thead>
                        <tr class="text-left text-gray-400 border-b border-white/10">
                            <th class="py-2 pr-4">URL</th>
                            <th class="py-2 pr-4">Status</th>
                            <th class="py-2 pr-4">Duration</th>
                            <th class="py-2 pr-4">Size</th>
                            <th class="py-2">Completed</th>
                        </tr>
                    </thead>
                    <tbody>
$recent_rows
                    </tbody>
                </table>
            </div>
        </div>

        <!-- Additional Stats -->
        <div class="grid grid-cols-1 md:grid-cols-3 gap-6">
$extra_stats
        </div>

        <script type="application/json" id="chart-data">$chart_data</script>
        <script>
            Chart.defaults.color = '#9ca3af';
            Chart.defaults.borderColor = '#1f2937';
            Chart.defaults.font.family = "'Inter', sans-serif";

            const charts = JSON.parse(document.getElementById('chart-data').textContent);

            new Chart(document.getElementById('timeSeriesChart'), {
                type: 'line',
                data: {
                    labels: charts.time_series.labels,
                    datasets: [
                        { label: 'Scrapes', data: charts.time_series.scrapes, borderColor: '#8b5cf6', backgroundColor: '#8b5cf6', tension: 0.3 },
                        { label: 'Success Rate (%)', data: charts.time_series.success_rate, borderColor: '#10b981', backgroundColor: '#10b981', tension: 0.3 }
                    ]
                },
                options: { responsive: true, maintainAspectRatio: false }
            });

            new Chart(document.getElementById('statusChart'), {
                type: 'pie',
                data: {
                    labels: charts.status.labels,
                    datasets: [{ data: charts.status.values, backgroundColor: ['#10b981', '#ef4444'], borderWidth: 0 }]
                },
                options: { responsive: true, maintainAspectRatio: false }
            });

            new Chart(document.getElementById('domainsChart'), {
                type: 'bar',
                data: {
                    labels: charts.domains.labels,
                    datasets: [{ label: 'Scrapes', data: charts.domains.scrapes, backgroundColor: '#8b5cf6', borderRadius: 8 }]
                },
                options: {
                    responsive: true,
                    maintainAspectRatio: false,
                    plugins: {
                        tooltip: {
                            callbacks: {
                                afterLabel: function (context) {
                                    const tip = charts.domains.tooltips[context.dataIndex];
                                    return [
                                        'Success rate: ' + tip.success_rate,
                                        'Avg duration: ' + tip.avg_duration_seconds,
                                        'Total size: ' + tip.total_size_bytes
                                    ];
                                }
                            }
                        }
                    }
                }
            });
        </script>
""")


def _render_card(card: SummaryCard) -> str:
    caption = f'<p class="mt-2 text-xs text-gray-400">{escape(card.caption)}</p>' if card.caption else ""
    return (
        '            <div class="glass-panel rounded-xl p-6">'
        f'<p class="text-sm font-medium text-gray-400">{escape(card.title)}</p>'
        f'<p class="mt-2 text-3xl font-bold text-white stat-value">{escape(card.value)}</p>'
        f"{caption}</div>"
    )


def _render_row(row: RecentRow) -> str:
    badge = "bg-green-500/20 text-green-100" if row.positive else "bg-red-500/20 text-red-100"
    title = escape(row.error or row.url, quote=True)
    return (
        '                        <tr class="border-b border-white/5">'
        f'<td class="py-2 pr-4 max-w-xs truncate" title="{title}">{escape(row.url)}</td>'
        f'<td class="py-2 pr-4"><span class="inline-flex px-2 py-1 text-xs font-semibold rounded-full {badge}">'
        f"{escape(row.status)}</span></td>"
        f'<td class="py-2 pr-4">{escape(row.duration)}</td>'
        f'<td class="py-2 pr-4">{escape(row.size)}</td>'
        f'<td class="py-2">{escape(row.completed)}</td></tr>'
    )


def _join(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def _json_for_script(payload) -> str:
    # Keep "</script>" inside a value from closing the tag
    return json.dumps(payload).replace("</", "<\\/")


def render_analytics_page(view: DashboardView) -> str:
    options = _join(
        f'                    <option value="{option["value"]}"{" selected" if option["selected"] else ""}>'
        f'{escape(option["label"])}</option>'
        for option in view.time_range_options
    )

    if view.status == "loading":
        body = LOADING_PANEL
    elif view.error is not None:
        body = ERROR_PANEL.substitute(message=escape(view.error), days=view.time_range)
    else:
        body = LOADED_BODY.substitute(
            cards=_join(_render_card(card) for card in view.cards),
            status_breakdown=_join(
                f'                    <div><p class="text-2xl font-bold text-white stat-value">{item.value}</p>'
                f'<p class="text-sm text-gray-400">{escape(item.name)} ({item.percent})</p></div>'
                for item in view.status_breakdown
            ),
            recent_rows=_join(_render_row(row) for row in view.recent),
            extra_stats=_join(_render_card(card) for card in view.extra_stats),
            chart_data=_json_for_script(view.charts),
        )

    return ANALYTICS_PAGE.substitute(time_range_options=options, body=body)
