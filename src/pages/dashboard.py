"""
src/pages/dashboard.py
───────────────────────
Dashboard page.

Static structure; KPI cards, charts and equipment cards are injected by
callbacks on every telemetry tick.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.layout.components.filters import page_header


def layout() -> html.Div:
    return html.Div(
        [
            page_header("Dashboard", "Fleet status, open work and predicted failure risk"),
            # ── KPI banner (dynamic) ──────────────────────────────────────────
            html.Div(id="dashboard-kpi-banner", className="mb-4"),
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Equipment Status", className="chart-title"),
                                dcc.Graph(id="dashboard-status-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Predicted Failure Risk", className="chart-title"),
                                dcc.Graph(id="dashboard-risk-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Needs Attention", className="chart-title"),
                                html.Div(id="dashboard-at-risk"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Equipment cards (dynamic) ─────────────────────────────────────
            html.Div(id="dashboard-equipment-cards"),
        ],
        style={"padding": "1.5rem"},
    )
