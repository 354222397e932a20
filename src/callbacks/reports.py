"""
src/callbacks/reports.py
─────────────────────────
Reports page: one chart + table per report type.
"""
from __future__ import annotations

from datetime import UTC, datetime

import pandas as pd
import plotly.graph_objects as go
from dash import Input, Output

from src.analytics.reports import ReportType, build_report
from src.data.models import EquipmentStatus
from src.data.store import MaintenanceStore
from src.layout.components.badges import STATUS_COLORS
from src.layout.components.metric_chart import base_layout
from src.layout.components.record_table import record_table

MUTED = "#8b949e"

TITLES = {
    ReportType.EQUIPMENT_STATUS: "Equipment Status Summary",
    ReportType.MAINTENANCE_ACTIVITY: "Maintenance Activity",
    ReportType.HEALTH_TRENDS: "Health Trends · average temperature, last 7 samples",
}


def report_figure(report_type: ReportType, df: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    if df.empty:
        fig.update_layout(**base_layout("No data for this report", 320))
        return fig

    if report_type == ReportType.EQUIPMENT_STATUS:
        fig.add_pie(
            labels=df["name"],
            values=df["value"],
            marker={"colors": [STATUS_COLORS.get(EquipmentStatus(n), MUTED) for n in df["name"]]},
            sort=False,
        )
    elif report_type == ReportType.MAINTENANCE_ACTIVITY:
        fig.add_bar(x=df["name"], y=df["value"], marker_color=["#2ea44f", "#e8a020", "#58a6ff"])
    else:
        fig.add_bar(
            x=df["name"], y=df["avg_temperature_c"], marker_color="#f0883e",
            hovertemplate="%{x}<br>%{y:.1f} °C<extra></extra>",
        )
        fig.update_yaxes(title_text="°C")
    fig.update_layout(**base_layout("", 320))
    return fig


def register(app, store: MaintenanceStore) -> None:

    @app.callback(
        [
            Output("report-title", "children"),
            Output("report-generated", "children"),
            Output("report-chart", "figure"),
            Output("report-table", "children"),
        ],
        Input("report-type", "value"),
        Input("store-revision", "data"),
    )
    def update_report(report_type: str, revision: int):
        report_type = ReportType(report_type)
        df = build_report(store, report_type)
        generated = f"Generated {datetime.now(tz=UTC):%d/%m/%Y %H:%M} UTC"
        table = record_table(
            [str(c).replace("_", " ").title() for c in df.columns],
            df.astype(str).values.tolist(),
            "No data for this report.",
        )
        return TITLES[report_type], generated, report_figure(report_type, df), table
