"""
src/pages/alerts.py
────────────────────
Alert management page with filters and acknowledgement.
"""

import dash_bootstrap_components as dbc
from dash import html

from config.alerts import AlertSeverity
from src.analytics.views import AckState
from src.layout.components.filters import (
    enum_options,
    page_header,
    result_count,
    search_field,
    select_field,
)

SORT_OPTIONS = [
    {"label": "Newest first", "value": "timestamp"},
    {"label": "Most severe first", "value": "severity"},
]


def layout() -> html.Div:
    return html.Div(
        [
            page_header(
                "System Alerts",
                "Equipment alerts and acknowledgement status",
                actions=[
                    dbc.Button("Acknowledge all", id="alerts-ack-all", n_clicks=0, size="sm", outline=True, color="info"),
                ],
            ),
            dbc.Row(
                [
                    search_field("alerts-search", "Message or equipment", md=2),
                    select_field("alerts-filter-severity", "Severity", enum_options(AlertSeverity)),
                    select_field("alerts-filter-status", "Status", enum_options(AckState)),
                    select_field("alerts-sort", "Sort by", SORT_OPTIONS, value="timestamp"),
                    result_count("alerts-count"),
                ],
                className="g-3 mb-3",
            ),
            html.Div(html.Div(id="alerts-table"), className="chart-card"),
        ],
        style={"padding": "1.5rem"},
    )
