"""
src/pages/reports.py
─────────────────────
Manager reports: pick a report, render its chart and table.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.analytics.reports import ReportType
from src.layout.components.filters import page_header, select_field

_REPORT_OPTIONS = [
    {"label": "Equipment Status Summary", "value": ReportType.EQUIPMENT_STATUS.value},
    {"label": "Maintenance Activity", "value": ReportType.MAINTENANCE_ACTIVITY.value},
    {"label": "Health Trends (avg. temperature)", "value": ReportType.HEALTH_TRENDS.value},
]


def layout() -> html.Div:
    return html.Div(
        [
            page_header("Reports", "Fleet status, maintenance activity and health trends"),
            dbc.Row(
                [select_field("report-type", "Report", _REPORT_OPTIONS, value=ReportType.EQUIPMENT_STATUS.value, md=4)],
                className="g-3 mb-3",
            ),
            html.Div(
                [
                    html.Div(id="report-title", className="chart-title"),
                    html.Div(id="report-generated", style={"fontSize": ".72rem", "color": "#8b949e"}),
                    dcc.Graph(id="report-chart", config={"displayModeBar": False}),
                    html.Div(id="report-table"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
