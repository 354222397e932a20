"""
src/callbacks/dashboard.py
───────────────────────────
Dashboard page: KPI banner, status distribution, predicted risk per unit,
at-risk list, unit cards.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, dcc, html

from src.analytics.reports import (
    at_risk_equipment_ids,
    dashboard_kpis,
    equipment_status_summary,
    risk_by_equipment,
)
from src.data.models import EquipmentStatus, RiskLevel
from src.data.store import MaintenanceStore
from src.layout.components.badges import RISK_COLORS, STATUS_COLORS, risk_badge, status_badge
from src.layout.components.kpi_card import count_card, kpi_card, mini_kpi
from src.layout.components.metric_chart import base_layout
from src.layout.components.record_table import fmt_date, muted

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def _status_figure(store: MaintenanceStore) -> go.Figure:
    df = equipment_status_summary(store)
    fig = go.Figure()
    if df.empty:
        fig.update_layout(**base_layout("No equipment", 260))
        return fig
    fig.add_pie(
        labels=df["name"],
        values=df["value"],
        hole=0.55,
        marker={"colors": [STATUS_COLORS.get(EquipmentStatus(name), MUTED) for name in df["name"]]},
        textinfo="label+value",
        sort=False,
    )
    fig.update_layout(**base_layout("", 260))
    fig.update_layout(showlegend=False)
    return fig


def _risk_figure(store: MaintenanceStore) -> go.Figure:
    """Bar per unit, height 1/2/3 for Low/Medium/High, coloured by risk."""
    df = risk_by_equipment(store)
    fig = go.Figure()
    if df.empty:
        fig.update_layout(**base_layout("No equipment", 260))
        return fig
    fig.add_bar(
        x=df["name"],
        y=df["score"],
        marker={"color": [RISK_COLORS.get(RiskLevel(risk), MUTED) for risk in df["risk"]]},
        customdata=df["risk"],
        hovertemplate="%{x}<br>%{customdata} risk<extra></extra>",
    )
    fig.update_layout(**base_layout("", 260))
    fig.update_layout(showlegend=False)
    fig.update_xaxes(tickangle=-30, showgrid=False)
    fig.update_yaxes(range=[0, 3.3], tickvals=[1, 2, 3], ticktext=[r.value for r in RiskLevel])
    return fig


def _kpi_banner(store: MaintenanceStore) -> dbc.Row:
    kpis = dashboard_kpis(store)
    cards = [
        kpi_card("Total Equipment", str(kpis.equipment_count), "#58a6ff", icon="⚙", href="/equipment"),
        count_card("Critical Alerts", kpis.error_alerts, "#da3633", icon="⚠", sub_label="unacknowledged", href="/alerts"),
        count_card("Warnings", kpis.warning_alerts, "#e8a020", icon="!", sub_label="unacknowledged", href="/alerts"),
        kpi_card("Upcoming Tasks", str(kpis.upcoming_tasks), "#58a6ff", icon="▤", href="/schedule"),
        count_card("At Risk", kpis.at_risk, "#da3633", highlight=True, icon="▲", sub_label="critical or high risk"),
    ]
    return dbc.Row([dbc.Col(card, xs=6, lg=True) for card in cards], className="g-3")


def _at_risk_list(store: MaintenanceStore) -> html.Div:
    ids = at_risk_equipment_ids(store)
    if not ids:
        return muted("No equipment is currently at risk.")
    states = store.health_states()
    items = []
    for equipment_id in ids:
        eq = store.get_equipment(equipment_id)
        state = states[equipment_id]
        items.append(
            html.Div(
                [
                    dcc.Link(eq.name, href=f"/equipment/{eq.id}", style={"fontWeight": "600"}),
                    html.Span(eq.location, style={"color": MUTED, "fontSize": ".75rem", "marginLeft": "8px"}),
                    html.Div(
                        [
                            status_badge(eq.status),
                            html.Span(" "),
                            risk_badge(state.predicted_risk),
                            html.Span(
                                f"  next service {fmt_date(state.next_service_date)}",
                                style={"color": MUTED, "fontSize": ".72rem"},
                            ),
                        ],
                        style={"marginTop": "4px"},
                    ),
                ],
                style={"padding": "8px 0", "borderBottom": f"1px solid {BORDER}"},
            )
        )
    return html.Div(items)


def _equipment_cards(store: MaintenanceStore) -> dbc.Row:
    states = store.health_states()
    cols = []
    for eq in store.list_equipment():
        state = states[eq.id]
        samples = store.samples(eq.id)
        latest = samples[-1] if samples else None
        active = store.active_alert_count(eq.id)
        risk_color = RISK_COLORS.get(state.predicted_risk, MUTED)
        highlight = state.predicted_risk == RiskLevel.HIGH or eq.status == EquipmentStatus.CRITICAL

        cols.append(
            dbc.Col(
                html.Div(
                    [
                        html.Div(
                            [
                                dcc.Link(eq.name, href=f"/equipment/{eq.id}", style={"fontWeight": "700", "fontSize": ".95rem"}),
                                html.Div(status_badge(eq.status), style={"float": "right"}),
                            ],
                            style={"marginBottom": "4px"},
                        ),
                        html.Div(f"{eq.type} · {eq.location}", style={"fontSize": ".72rem", "color": MUTED, "marginBottom": "10px"}),
                        html.Div(
                            [
                                mini_kpi("Risk", state.predicted_risk.value, risk_color),
                                mini_kpi("Next Service", fmt_date(state.next_service_date)),
                                mini_kpi("Active Alerts", str(active), "#e8a020" if active else "#2ea44f"),
                                mini_kpi("Temperature", f"{latest.temperature:.1f} °C" if latest else "—"),
                            ],
                            style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "8px"},
                        ),
                    ],
                    style={
                        "backgroundColor": CARD_BG,
                        "border": f"1px solid {risk_color if highlight else BORDER}",
                        "borderRadius": "8px",
                        "padding": "14px",
                        "height": "100%",
                    },
                ),
                md=6,
                xl=4,
            )
        )
    return dbc.Row(cols, className="g-3")


def register(app, store: MaintenanceStore) -> None:

    @app.callback(
        [
            Output("dashboard-kpi-banner", "children"),
            Output("dashboard-status-chart", "figure"),
            Output("dashboard-risk-chart", "figure"),
            Output("dashboard-at-risk", "children"),
            Output("dashboard-equipment-cards", "children"),
        ],
        Input("store-tick", "data"),
        Input("store-revision", "data"),
    )
    def update_dashboard(tick: int, revision: int):
        return (
            _kpi_banner(store),
            _status_figure(store),
            _risk_figure(store),
            _at_risk_list(store),
            _equipment_cards(store),
        )
