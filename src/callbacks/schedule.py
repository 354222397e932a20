"""
src/callbacks/schedule.py
──────────────────────────
Schedule page callbacks: task table, create/edit dialog, delete.
"""
from __future__ import annotations

from datetime import UTC, datetime

from dash import ALL, Input, Output, State, ctx, dcc, no_update
from dash.exceptions import PreventUpdate
from pydantic import ValidationError

from config.roles import can_manage
from src.analytics.views import TASK_VIEW
from src.callbacks.common import (
    clicked_index,
    count_label,
    current_role,
    error_alert,
    parse_date,
    success_alert,
    validation_alert,
)
from src.data.models import MaintenanceTask, TaskPriority, TaskStatus
from src.data.store import MaintenanceStore
from src.errors import MaintenanceError
from src.layout.components.badges import priority_badge, task_status_badge
from src.layout.components.record_table import DANGER, action_button, fmt_date, record_table
from src.pages.schedule import technician_names

# Order of the dialog fields in the form callback's outputs
FORM_FIELDS = ("description", "equipment", "assignee", "due", "status", "priority", "notes")
UNASSIGNED = "Unassigned"


def _form_values(task: MaintenanceTask) -> tuple:
    return (
        task.description,
        task.equipment_id,
        task.assigned_to,
        task.due_date.date().isoformat(),
        task.status.value,
        task.priority.value,
        task.notes or "",
    )


def _blank_form(store: MaintenanceStore) -> tuple:
    equipment = store.list_equipment()
    technicians = technician_names(store)
    return (
        "",
        equipment[0].id if equipment else None,
        technicians[0] if technicians else None,
        datetime.now(tz=UTC).date().isoformat(),
        TaskStatus.PENDING.value,
        TaskPriority.MEDIUM.value,
        "",
    )


def register(app, store: MaintenanceStore) -> None:

    @app.callback(
        [
            Output("tasks-table", "children"),
            Output("tasks-count", "children"),
        ],
        [
            Input("tasks-search", "value"),
            Input("tasks-filter-status", "value"),
            Input("tasks-filter-priority", "value"),
            Input("tasks-filter-assignee", "value"),
            Input("store-revision", "data"),
        ],
        State("store-user", "data"),
    )
    def update_tasks_table(search, status, priority, assignee, revision, user_id):
        records = store.list_tasks()
        try:
            spec = TASK_VIEW.spec(search, {"status": status, "priority": priority, "assigned_to": assignee})
            selected = TASK_VIEW.run(records, spec)
        except MaintenanceError as exc:
            return error_alert(exc), ""

        manage = can_manage(current_role(store, user_id))
        rows = []
        for t in selected:
            actions = [
                action_button("Edit", "task-edit-btn", t.id),
                action_button("Delete", "task-delete-btn", t.id, color=DANGER),
            ] if manage else []
            rows.append(
                [
                    fmt_date(t.due_date),
                    t.description,
                    dcc.Link(t.equipment_name, href=f"/equipment/{t.equipment_id}"),
                    t.assigned_to,
                    priority_badge(t.priority),
                    task_status_badge(t.status),
                    actions,
                ]
            )
        table = record_table(
            ["Due", "Description", "Equipment", "Assigned to", "Priority", "Status", ""],
            rows,
            "No tasks match the current filters.",
        )
        return table, count_label(len(selected), len(records), "tasks")

    @app.callback(
        [
            Output("task-modal", "is_open"),
            Output("task-modal-title", "children"),
            Output("task-form-id", "data"),
            *[Output(f"task-form-{name}", "date" if name == "due" else "value") for name in FORM_FIELDS],
            Output("task-form-feedback", "children"),
            Output("tasks-feedback", "children"),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        [
            Input("task-new", "n_clicks"),
            Input({"type": "task-edit-btn", "index": ALL}, "n_clicks"),
            Input("task-form-cancel", "n_clicks"),
            Input("task-form-save", "n_clicks"),
        ],
        [
            State("task-form-id", "data"),
            *[State(f"task-form-{name}", "date" if name == "due" else "value") for name in FORM_FIELDS],
            State("store-revision", "data"),
        ],
        prevent_initial_call=True,
    )
    def handle_task_form(
        n_new, n_edit, n_cancel, n_save,
        task_id, description, equipment_id, assignee, due, status, priority, notes,
        revision,
    ):
        unchanged = (no_update,) * len(FORM_FIELDS)
        trigger = ctx.triggered_id

        if trigger == "task-new":
            return True, "New Task", None, *_blank_form(store), None, no_update, no_update

        if isinstance(trigger, dict):
            try:
                task = store.get_task(clicked_index())
            except MaintenanceError as exc:
                return False, no_update, None, *unchanged, None, error_alert(exc), no_update
            return True, "Edit Task", task.id, *_form_values(task), None, no_update, no_update

        if trigger == "task-form-cancel":
            return False, no_update, None, *unchanged, None, no_update, no_update

        if trigger != "task-form-save" or not n_save:
            raise PreventUpdate

        try:
            created_at = store.get_task(task_id).created_at if task_id else datetime.now(tz=UTC)
            task = store.save_task(
                MaintenanceTask(
                    id=task_id or "",
                    equipment_id=equipment_id or "",
                    equipment_name="",
                    description=(description or "").strip(),
                    assigned_to=assignee or UNASSIGNED,
                    due_date=parse_date(due),
                    status=status,
                    priority=priority,
                    notes=notes or None,
                    created_at=created_at,
                )
            )
        except ValidationError as exc:
            return True, no_update, task_id, *unchanged, validation_alert(exc), no_update, no_update
        except MaintenanceError as exc:
            return True, no_update, task_id, *unchanged, error_alert(exc), no_update, no_update

        verb = "Updated" if task_id else "Created"
        return (
            False, no_update, None, *unchanged, None,
            success_alert(f"{verb} task for {task.equipment_name}."),
            (revision or 0) + 1,
        )

    @app.callback(
        [
            Output("tasks-feedback", "children", allow_duplicate=True),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        Input({"type": "task-delete-btn", "index": ALL}, "n_clicks"),
        State("store-revision", "data"),
        prevent_initial_call=True,
    )
    def delete_task(n_clicks: list, revision: int):
        task_id = clicked_index()
        try:
            store.delete_task(task_id)
        except MaintenanceError as exc:
            return error_alert(exc), no_update
        return success_alert("Task deleted."), (revision or 0) + 1
