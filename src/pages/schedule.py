"""
src/pages/schedule.py
──────────────────────
Maintenance schedule: task list, filters and the create/edit task dialog.
"""
from datetime import UTC, datetime

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.roles import UserRole, can_manage
from src.data.models import TaskPriority, TaskStatus
from src.data.store import MaintenanceStore
from src.layout.components.filters import (
    LABEL_STYLE,
    enum_options,
    hidden_unless,
    page_header,
    result_count,
    search_field,
    select_field,
    value_options,
)


def technician_names(store: MaintenanceStore) -> list[str]:
    return [u.name for u in store.list_users() if u.role == UserRole.TECHNICIAN]


def _task_modal(store: MaintenanceStore) -> dbc.Modal:
    equipment_options = [{"label": eq.name, "value": eq.id} for eq in store.list_equipment()]
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(id="task-modal-title")),
            dbc.ModalBody(
                [
                    dcc.Store(id="task-form-id"),
                    html.Div(id="task-form-feedback"),
                    html.Label("Description", style=LABEL_STYLE),
                    dbc.Textarea(id="task-form-description", className="mb-2"),
                    html.Label("Equipment", style=LABEL_STYLE),
                    dcc.Dropdown(id="task-form-equipment", options=equipment_options, clearable=False, className="mb-2"),
                    html.Label("Assigned to", style=LABEL_STYLE),
                    dcc.Dropdown(id="task-form-assignee", options=value_options(technician_names(store), include_all=False), className="mb-2"),
                    html.Label("Due date", style=LABEL_STYLE),
                    html.Div(dcc.DatePickerSingle(id="task-form-due", date=datetime.now(tz=UTC).date()), className="mb-2"),
                    dbc.Row(
                        [
                            dbc.Col([html.Label("Status", style=LABEL_STYLE), dcc.Dropdown(id="task-form-status", options=enum_options(TaskStatus, include_all=False), clearable=False)]),
                            dbc.Col([html.Label("Priority", style=LABEL_STYLE), dcc.Dropdown(id="task-form-priority", options=enum_options(TaskPriority, include_all=False), clearable=False)]),
                        ],
                        className="mb-2",
                    ),
                    html.Label("Notes", style=LABEL_STYLE),
                    dbc.Textarea(id="task-form-notes"),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id="task-form-cancel", n_clicks=0, color="secondary", size="sm"),
                    dbc.Button("Save", id="task-form-save", n_clicks=0, color="primary", size="sm"),
                ]
            ),
        ],
        id="task-modal",
        is_open=False,
    )


def layout(store: MaintenanceStore, role: UserRole) -> html.Div:
    return html.Div(
        [
            page_header(
                "Maintenance Schedule",
                "Planned and open maintenance tasks",
                actions=[
                    dbc.Button(
                        "+ New task", id="task-new", n_clicks=0, size="sm", color="primary",
                        style=hidden_unless(can_manage(role)),
                    )
                ],
            ),
            html.Div(id="tasks-feedback"),
            dbc.Row(
                [
                    search_field("tasks-search", "Description or equipment", md=3),
                    select_field("tasks-filter-status", "Status", enum_options(TaskStatus)),
                    select_field("tasks-filter-priority", "Priority", enum_options(TaskPriority)),
                    select_field("tasks-filter-assignee", "Assignee", value_options(technician_names(store)), md=3),
                    result_count("tasks-count"),
                ],
                className="g-3 mb-3",
            ),
            html.Div(html.Div(id="tasks-table"), className="chart-card"),
            _task_modal(store),
        ],
        style={"padding": "1.5rem"},
    )
