"""
src/callbacks/equipment.py
───────────────────────────
Equipment list and detail page callbacks.

List:   search / filter table, delete with cascade confirmation
Detail: metric charts on every tick, related tasks and logs
Both:   add/edit dialog (name, type, location, status, service dates, notes)
"""
from __future__ import annotations

from datetime import UTC, datetime

from dash import ALL, Input, Output, State, ctx, dcc, html, no_update
from dash.exceptions import PreventUpdate
from pydantic import ValidationError

from config.risk import RISK_THRESHOLDS
from config.roles import can_manage
from src.analytics.views import EQUIPMENT_VIEW, LOG_VIEW, TASK_VIEW
from src.callbacks.common import (
    clicked_index,
    count_label,
    current_role,
    error_alert,
    parse_date,
    success_alert,
    validation_alert,
)
from src.data.models import Equipment, EquipmentStatus
from src.data.store import MaintenanceStore
from src.errors import MaintenanceError, ReferentialCascadeError
from src.layout.components.badges import priority_badge, risk_badge, status_badge, task_status_badge
from src.layout.components.metric_chart import metric_figure
from src.layout.components.record_table import DANGER, action_button, fmt_date, muted, record_table

MUTED = "#8b949e"

# column → (title, line color, medium threshold, high threshold)
CHARTS = {
    "vibration": ("Vibration (mm/s)", "#58a6ff", RISK_THRESHOLDS.medium.vibration_mms, RISK_THRESHOLDS.high.vibration_mms),
    "temperature": ("Temperature (°C)", "#f0883e", RISK_THRESHOLDS.medium.temperature_c, RISK_THRESHOLDS.high.temperature_c),
    "usage_hours": ("Usage (h)", "#2ea44f", None, None),
    "energy_consumption": ("Energy (kWh)", "#bc8cff", None, None),
}


# Order of the dialog fields in the form callback's outputs
FORM_FIELDS = ("name", "type", "location", "status", "last-service", "purchase", "notes")
DATE_FIELDS = ("last-service", "purchase")
DEFAULT_TYPE = "Unknown"
DEFAULT_LOCATION = "Unassigned"


def _form_prop(field: str) -> str:
    return "date" if field in DATE_FIELDS else "value"


def _form_values(eq: Equipment) -> tuple:
    return (
        eq.name,
        eq.type,
        eq.location,
        eq.status.value,
        eq.last_service_date.date().isoformat(),
        eq.purchase_date.date().isoformat(),
        eq.notes or "",
    )


def _blank_form() -> tuple:
    today = datetime.now(tz=UTC).date().isoformat()
    return ("", "", "", EquipmentStatus.OK.value, today, today, "")


def _cascade_message(store: MaintenanceStore, exc: ReferentialCascadeError) -> str:
    name = store.get_equipment(exc.record_id).name
    parts = ", ".join(f"{n} {kind}" for kind, n in exc.dependents.items())
    return f"{name} is still referenced by {parts}. Delete it together with these records?"


def register(app, store: MaintenanceStore) -> None:

    # ── List ──────────────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("equipment-table", "children"),
            Output("equipment-count", "children"),
        ],
        [
            Input("equipment-search", "value"),
            Input("equipment-filter-status", "value"),
            Input("equipment-filter-type", "value"),
            Input("store-tick", "data"),
            Input("store-revision", "data"),
        ],
        State("store-user", "data"),
    )
    def update_equipment_table(search, status, equipment_type, tick, revision, user_id):
        records = store.list_equipment()
        try:
            spec = EQUIPMENT_VIEW.spec(search, {"status": status, "type": equipment_type})
            selected = EQUIPMENT_VIEW.run(records, spec)
        except MaintenanceError as exc:
            return error_alert(exc), ""

        manage = can_manage(current_role(store, user_id))
        states = store.health_states()
        rows = []
        for eq in selected:
            state = states[eq.id]
            next_service = fmt_date(state.next_service_date) if state.next_service_date else muted("suspended")
            rows.append(
                [
                    dcc.Link(eq.name, href=f"/equipment/{eq.id}", style={"fontWeight": "600"}),
                    eq.type,
                    muted(eq.location),
                    status_badge(eq.status),
                    risk_badge(state.predicted_risk),
                    fmt_date(eq.last_service_date),
                    next_service,
                    action_button("Delete", "equipment-delete-btn", eq.id, color=DANGER) if manage else "",
                ]
            )
        table = record_table(
            ["Name", "Type", "Location", "Status", "Risk", "Last Service", "Next Service", ""],
            rows,
            "No equipment matches the current filters.",
        )
        return table, count_label(len(selected), len(records), "units")

    @app.callback(
        [
            Output("equipment-confirm-delete", "displayed"),
            Output("equipment-confirm-delete", "message"),
            Output("store-pending-delete", "data"),
            Output("equipment-feedback", "children"),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        Input({"type": "equipment-delete-btn", "index": ALL}, "n_clicks"),
        State("store-revision", "data"),
        prevent_initial_call=True,
    )
    def request_delete(n_clicks: list, revision: int):
        equipment_id = clicked_index()
        try:
            name = store.get_equipment(equipment_id).name
            store.delete_equipment(equipment_id)
        except ReferentialCascadeError as exc:
            return True, _cascade_message(store, exc), equipment_id, no_update, no_update
        except MaintenanceError as exc:
            return False, no_update, None, error_alert(exc), no_update
        return False, no_update, None, success_alert(f"Deleted {name}."), (revision or 0) + 1

    @app.callback(
        [
            Output("equipment-feedback", "children", allow_duplicate=True),
            Output("store-pending-delete", "data", allow_duplicate=True),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        Input("equipment-confirm-delete", "submit_n_clicks"),
        State("store-pending-delete", "data"),
        State("store-revision", "data"),
        prevent_initial_call=True,
    )
    def confirm_delete(submit_n_clicks: int, equipment_id: str | None, revision: int):
        if not submit_n_clicks or not equipment_id:
            raise PreventUpdate
        try:
            name = store.get_equipment(equipment_id).name
            removed = store.delete_equipment(equipment_id, cascade=True)
        except MaintenanceError as exc:
            return error_alert(exc), None, no_update
        detail = ", ".join(f"{n} {kind}" for kind, n in removed.items())
        return success_alert(f"Deleted {name} and {detail}."), None, (revision or 0) + 1

    # ── Detail ────────────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("equipment-detail-header", "children"),
            Output("equipment-chart-vibration", "figure"),
            Output("equipment-chart-temperature", "figure"),
            Output("equipment-chart-usage", "figure"),
            Output("equipment-chart-energy", "figure"),
        ],
        Input("store-tick", "data"),
        Input("store-revision", "data"),
        State("equipment-detail-id", "data"),
    )
    def update_detail(tick: int, revision: int, equipment_id: str):
        try:
            eq = store.get_equipment(equipment_id)
            state = store.health_state(equipment_id)
            df = store.metrics_frame(equipment_id)
        except MaintenanceError:
            # Deleted while the page was open
            raise PreventUpdate from None

        header = html.Div(
            [
                html.H2(eq.name, className="page-title"),
                html.Div(
                    [
                        status_badge(eq.status),
                        html.Span(" "),
                        risk_badge(state.predicted_risk),
                        html.Span(
                            f"  {eq.type} · {eq.location} · last service {fmt_date(eq.last_service_date)}"
                            f" · next service {fmt_date(state.next_service_date)}",
                            style={"color": MUTED, "fontSize": ".8rem"},
                        ),
                    ]
                ),
                html.P(eq.notes, style={"color": MUTED, "fontSize": ".8rem", "marginTop": "6px"}) if eq.notes else None,
            ]
        )
        figures = [
            metric_figure(df, column, title, color=color, medium=medium, high=high)
            for column, (title, color, medium, high) in CHARTS.items()
        ]
        return header, *figures

    @app.callback(
        [
            Output("equipment-modal", "is_open"),
            Output("equipment-modal-title", "children"),
            Output("equipment-form-id", "data"),
            *[Output(f"equipment-form-{name}", _form_prop(name)) for name in FORM_FIELDS],
            Output("equipment-form-feedback", "children"),
            Output("equipment-form-result", "children"),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        [
            Input("equipment-new", "n_clicks"),
            Input("equipment-edit", "n_clicks"),
            Input("equipment-form-cancel", "n_clicks"),
            Input("equipment-form-save", "n_clicks"),
        ],
        [
            State("equipment-form-id", "data"),
            *[State(f"equipment-form-{name}", _form_prop(name)) for name in FORM_FIELDS],
            State("equipment-detail-id", "data"),
            State("store-revision", "data"),
        ],
        prevent_initial_call=True,
    )
    def handle_equipment_form(
        n_new, n_edit, n_cancel, n_save,
        form_id, name, equipment_type, location, status, last_service, purchase, notes,
        detail_id, revision,
    ):
        unchanged = (no_update,) * len(FORM_FIELDS)
        trigger = ctx.triggered_id

        if trigger == "equipment-new" and n_new:
            return True, "Add Equipment", None, *_blank_form(), None, no_update, no_update

        if trigger == "equipment-edit" and n_edit:
            try:
                eq = store.get_equipment(detail_id)
            except MaintenanceError as exc:
                return False, no_update, None, *unchanged, None, error_alert(exc), no_update
            return True, f"Edit {eq.name}", eq.id, *_form_values(eq), None, no_update, no_update

        if trigger == "equipment-form-cancel":
            return False, no_update, None, *unchanged, None, no_update, no_update

        if trigger != "equipment-form-save" or not n_save:
            raise PreventUpdate

        today = datetime.now(tz=UTC)
        values = {
            "name": (name or "").strip(),
            "type": (equipment_type or "").strip() or DEFAULT_TYPE,
            "location": (location or "").strip() or DEFAULT_LOCATION,
            "status": status,
            "last_service_date": parse_date(last_service) or today,
            "purchase_date": parse_date(purchase) or today,
            "notes": notes or None,
        }
        try:
            # Fields the dialog does not show (assigned technician) are kept
            base = store.get_equipment(form_id).model_dump() if form_id else {"id": ""}
            eq = store.save_equipment(Equipment(**{**base, **values}))
        except ValidationError as exc:
            return True, no_update, form_id, *unchanged, validation_alert(exc), no_update, no_update
        except MaintenanceError as exc:
            return True, no_update, form_id, *unchanged, error_alert(exc), no_update, no_update

        state = store.health_state(eq.id)
        verb = "Updated" if form_id else "Added"
        return (
            False, no_update, None, *unchanged, None,
            success_alert(f"{verb} {eq.name}; predicted risk {state.predicted_risk.value}."),
            (revision or 0) + 1,
        )

    @app.callback(
        [
            Output("equipment-detail-tasks", "children"),
            Output("equipment-detail-logs", "children"),
        ],
        Input("store-revision", "data"),
        State("equipment-detail-id", "data"),
    )
    def update_related(revision: int, equipment_id: str):
        tasks = TASK_VIEW.run(store.list_tasks(), TASK_VIEW.spec(filters={"equipment_id": equipment_id}))
        logs = LOG_VIEW.run(store.list_logs(), LOG_VIEW.spec(filters={"equipment_id": equipment_id}))
        task_table = record_table(
            ["Due", "Description", "Priority", "Status"],
            [[fmt_date(t.due_date), t.description, priority_badge(t.priority), task_status_badge(t.status)] for t in tasks],
            "No maintenance tasks for this unit.",
        )
        log_table = record_table(
            ["Date", "Performed by", "Description", "Hours"],
            [[fmt_date(log.date), log.performed_by, muted(log.description), f"{log.duration_hours:g}"] for log in logs],
            "No maintenance history for this unit.",
        )
        return task_table, log_table
