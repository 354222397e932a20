"""
src/callbacks/logs.py
──────────────────────
Maintenance log page callbacks: log table, new-entry dialog, delete.
"""
from __future__ import annotations

from dash import ALL, Input, Output, State, ctx, dcc, html, no_update
from dash.exceptions import PreventUpdate
from pydantic import ValidationError

from config.roles import can_manage
from src.analytics.views import LOG_VIEW
from src.callbacks.common import (
    clicked_index,
    count_label,
    current_role,
    current_user,
    error_alert,
    parse_date,
    success_alert,
    validation_alert,
)
from src.data.models import MaintenanceLogEntry, PartUsage
from src.data.store import MaintenanceStore
from src.errors import MaintenanceError
from src.layout.components.record_table import DANGER, action_button, fmt_date, muted, record_table


def _parts_cell(entry: MaintenanceLogEntry):
    if not entry.parts_used:
        return muted("—")
    return html.Div([html.Div(f"{p.quantity} × {p.part_name}") for p in entry.parts_used], style={"fontSize": ".75rem"})


def register(app, store: MaintenanceStore) -> None:

    @app.callback(
        [
            Output("logs-table", "children"),
            Output("logs-count", "children"),
        ],
        [
            Input("logs-search", "value"),
            Input("logs-filter-equipment", "value"),
            Input("logs-filter-technician", "value"),
            Input("store-revision", "data"),
        ],
        State("store-user", "data"),
    )
    def update_logs_table(search, equipment_id, technician, revision, user_id):
        records = store.list_logs()
        try:
            spec = LOG_VIEW.spec(search, {"equipment_id": equipment_id, "performed_by": technician})
            selected = LOG_VIEW.run(records, spec)
        except MaintenanceError as exc:
            return error_alert(exc), ""

        manage = can_manage(current_role(store, user_id))
        rows = [
            [
                fmt_date(log.date),
                dcc.Link(log.equipment_name, href=f"/equipment/{log.equipment_id}"),
                log.performed_by,
                log.description,
                f"{log.duration_hours:g} h",
                _parts_cell(log),
                action_button("Delete", "log-delete-btn", log.id, color=DANGER) if manage else "",
            ]
            for log in selected
        ]
        table = record_table(
            ["Date", "Equipment", "Performed by", "Description", "Duration", "Parts", ""],
            rows,
            "No log entries match the current filters.",
        )
        return table, count_label(len(selected), len(records), "entries")

    @app.callback(
        [
            Output("log-modal", "is_open"),
            Output("log-form-performed-by", "value"),
            Output("log-form-description", "value"),
            Output("log-form-part", "value"),
            Output("log-form-feedback", "children"),
            Output("logs-feedback", "children"),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        [
            Input("log-new", "n_clicks"),
            Input("log-form-cancel", "n_clicks"),
            Input("log-form-save", "n_clicks"),
        ],
        [
            State("store-user", "data"),
            State("log-form-equipment", "value"),
            State("log-form-date", "date"),
            State("log-form-performed-by", "value"),
            State("log-form-description", "value"),
            State("log-form-duration", "value"),
            State("log-form-part", "value"),
            State("log-form-part-qty", "value"),
            State("store-revision", "data"),
        ],
        prevent_initial_call=True,
    )
    def handle_log_form(
        n_new, n_cancel, n_save,
        user_id, equipment_id, date, performed_by, description, duration, part_id, part_qty,
        revision,
    ):
        trigger = ctx.triggered_id
        if trigger == "log-new":
            return True, current_user(store, user_id).name, "", None, None, no_update, no_update
        if trigger == "log-form-cancel":
            return False, no_update, no_update, no_update, None, no_update, no_update
        if trigger != "log-form-save" or not n_save:
            raise PreventUpdate

        try:
            parts_used = [PartUsage(part_id=part_id, part_name="", quantity=part_qty)] if part_id else []
            entry = store.add_log(
                MaintenanceLogEntry(
                    id="",
                    equipment_id=equipment_id or "",
                    equipment_name="",
                    date=parse_date(date),
                    performed_by=performed_by or "",
                    description=(description or "").strip(),
                    parts_used=parts_used,
                    duration_hours=duration if duration is not None else 0.0,
                )
            )
        except ValidationError as exc:
            return True, no_update, no_update, no_update, validation_alert(exc), no_update, no_update
        except MaintenanceError as exc:
            return True, no_update, no_update, no_update, error_alert(exc), no_update, no_update

        return (
            False, no_update, no_update, no_update, None,
            success_alert(f"Logged work on {entry.equipment_name}."),
            (revision or 0) + 1,
        )

    @app.callback(
        [
            Output("logs-feedback", "children", allow_duplicate=True),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        Input({"type": "log-delete-btn", "index": ALL}, "n_clicks"),
        State("store-revision", "data"),
        prevent_initial_call=True,
    )
    def delete_log(n_clicks: list, revision: int):
        log_id = clicked_index()
        try:
            store.delete_log(log_id)
        except MaintenanceError as exc:
            return error_alert(exc), no_update
        return success_alert("Log entry deleted."), (revision or 0) + 1
