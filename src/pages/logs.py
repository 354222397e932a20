"""
src/pages/logs.py
──────────────────
Maintenance log list, filters and the new-entry dialog.
"""
from datetime import UTC, datetime

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.roles import UserRole, can_log_work
from src.data.store import MaintenanceStore
from src.layout.components.filters import (
    ALL_OPTION,
    LABEL_STYLE,
    hidden_unless,
    page_header,
    result_count,
    search_field,
    select_field,
    value_options,
)


def _log_modal(store: MaintenanceStore) -> dbc.Modal:
    equipment_options = [{"label": eq.name, "value": eq.id} for eq in store.list_equipment()]
    part_options = [{"label": p.name, "value": p.id} for p in store.list_parts()]
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("New Log Entry")),
            dbc.ModalBody(
                [
                    html.Div(id="log-form-feedback"),
                    html.Label("Equipment", style=LABEL_STYLE),
                    dcc.Dropdown(id="log-form-equipment", options=equipment_options, clearable=False, className="mb-2"),
                    html.Label("Date", style=LABEL_STYLE),
                    html.Div(dcc.DatePickerSingle(id="log-form-date", date=datetime.now(tz=UTC).date()), className="mb-2"),
                    html.Label("Performed by", style=LABEL_STYLE),
                    dcc.Dropdown(
                        id="log-form-performed-by",
                        options=value_options([u.name for u in store.list_users()], include_all=False),
                        clearable=False,
                        className="mb-2",
                    ),
                    html.Label("Description", style=LABEL_STYLE),
                    dbc.Textarea(id="log-form-description", className="mb-2"),
                    html.Label("Duration (hours)", style=LABEL_STYLE),
                    dbc.Input(id="log-form-duration", type="number", min=0, step=0.5, value=1, className="mb-2"),
                    html.Label("Parts used", style=LABEL_STYLE),
                    dbc.Row(
                        [
                            dbc.Col(dcc.Dropdown(id="log-form-part", options=part_options), md=8),
                            dbc.Col(dbc.Input(id="log-form-part-qty", type="number", min=1, step=1, value=1), md=4),
                        ]
                    ),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id="log-form-cancel", n_clicks=0, color="secondary", size="sm"),
                    dbc.Button("Save", id="log-form-save", n_clicks=0, color="primary", size="sm"),
                ]
            ),
        ],
        id="log-modal",
        is_open=False,
    )


def layout(store: MaintenanceStore, role: UserRole) -> html.Div:
    equipment_options = [ALL_OPTION] + [{"label": eq.name, "value": eq.id} for eq in store.list_equipment()]
    return html.Div(
        [
            page_header(
                "Maintenance Logs",
                "Completed work, time spent and parts consumed",
                actions=[
                    dbc.Button(
                        "+ New entry", id="log-new", n_clicks=0, size="sm", color="primary",
                        style=hidden_unless(can_log_work(role)),
                    )
                ],
            ),
            html.Div(id="logs-feedback"),
            dbc.Row(
                [
                    search_field("logs-search", "Description or equipment"),
                    select_field("logs-filter-equipment", "Equipment", equipment_options, md=3),
                    select_field("logs-filter-technician", "Technician", value_options([u.name for u in store.list_users()])),
                    result_count("logs-count"),
                ],
                className="g-3 mb-3",
            ),
            html.Div(html.Div(id="logs-table"), className="chart-card"),
            _log_modal(store),
        ],
        style={"padding": "1.5rem"},
    )
