"""
src/callbacks/alerts.py
────────────────────────
Alert management page callbacks.
"""
from __future__ import annotations

from dash import ALL, Input, Output, State, dcc
from dash.exceptions import PreventUpdate

from src.analytics.views import ALERT_VIEW
from src.callbacks.common import clicked_index, count_label, error_alert
from src.data.store import MaintenanceStore
from src.errors import MaintenanceError
from src.layout.components.badges import severity_badge
from src.layout.components.record_table import action_button, fmt_datetime, muted, record_table

GREEN = "#2ea44f"


def register(app, store: MaintenanceStore) -> None:

    @app.callback(
        [
            Output("alerts-table", "children"),
            Output("alerts-count", "children"),
        ],
        [
            Input("alerts-search", "value"),
            Input("alerts-filter-severity", "value"),
            Input("alerts-filter-status", "value"),
            Input("alerts-sort", "value"),
            Input("store-tick", "data"),
            Input("store-revision", "data"),
        ],
    )
    def update_alerts_table(search, severity, ack_state, sort_key, tick, revision):
        records = store.list_alerts()
        try:
            spec = ALERT_VIEW.spec(search, {"severity": severity, "acknowledged": ack_state}, sort_key, "desc")
            selected = ALERT_VIEW.run(records, spec)
        except MaintenanceError as exc:
            return error_alert(exc), ""

        rows = [
            [
                muted(fmt_datetime(a.timestamp)),
                dcc.Link(a.equipment_name, href=f"/equipment/{a.equipment_id}"),
                severity_badge(a.severity),
                a.message,
                action_button(
                    "✓ Acknowledged" if a.acknowledged else "Acknowledge",
                    "ack-btn",
                    a.id,
                    color=GREEN if a.acknowledged else "#58a6ff",
                    disabled=a.acknowledged,
                ),
            ]
            for a in selected
        ]
        table = record_table(
            ["Time", "Equipment", "Severity", "Message", "Status"],
            rows,
            "No alerts match the current filters.",
        )
        unacked = store.active_alert_count()
        return table, f"{count_label(len(selected), len(records), 'alerts')} · {unacked} unacknowledged"

    @app.callback(
        Output("store-revision", "data", allow_duplicate=True),
        Input({"type": "ack-btn", "index": ALL}, "n_clicks"),
        State("store-revision", "data"),
        prevent_initial_call=True,
    )
    def acknowledge_alert(n_clicks: list, revision: int) -> int:
        alert_id = clicked_index()
        try:
            store.acknowledge_alert(alert_id)
        except MaintenanceError:
            # Removed by a cascade delete in another session
            raise PreventUpdate from None
        return (revision or 0) + 1

    @app.callback(
        Output("store-revision", "data", allow_duplicate=True),
        Input("alerts-ack-all", "n_clicks"),
        State("store-revision", "data"),
        prevent_initial_call=True,
    )
    def acknowledge_all(n_clicks: int, revision: int) -> int:
        if not n_clicks or not store.acknowledge_all():
            raise PreventUpdate
        return (revision or 0) + 1
