"""
src/pages/equipment.py
───────────────────────
Equipment list (search + status/type filters) and equipment detail view.

Both pages carry the add/edit dialog and both of its trigger buttons; the
button that does not apply to the page stays hidden.
"""
from datetime import UTC, datetime

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.roles import UserRole, can_manage
from src.data.models import EquipmentStatus
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


def _equipment_modal() -> dbc.Modal:
    today = datetime.now(tz=UTC).date()
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(id="equipment-modal-title")),
            dbc.ModalBody(
                [
                    dcc.Store(id="equipment-form-id"),
                    html.Div(id="equipment-form-feedback"),
                    html.Label("Name", style=LABEL_STYLE),
                    dbc.Input(id="equipment-form-name", className="mb-2"),
                    dbc.Row(
                        [
                            dbc.Col([html.Label("Type", style=LABEL_STYLE), dbc.Input(id="equipment-form-type")]),
                            dbc.Col([html.Label("Location", style=LABEL_STYLE), dbc.Input(id="equipment-form-location")]),
                        ],
                        className="mb-2",
                    ),
                    html.Label("Status", style=LABEL_STYLE),
                    dcc.Dropdown(id="equipment-form-status", options=enum_options(EquipmentStatus, include_all=False), clearable=False, className="mb-2"),
                    dbc.Row(
                        [
                            dbc.Col([html.Label("Last service", style=LABEL_STYLE), html.Div(dcc.DatePickerSingle(id="equipment-form-last-service", date=today))]),
                            dbc.Col([html.Label("Purchased", style=LABEL_STYLE), html.Div(dcc.DatePickerSingle(id="equipment-form-purchase", date=today))]),
                        ],
                        className="mb-2",
                    ),
                    html.Label("Notes", style=LABEL_STYLE),
                    dbc.Textarea(id="equipment-form-notes"),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id="equipment-form-cancel", n_clicks=0, color="secondary", size="sm"),
                    dbc.Button("Save", id="equipment-form-save", n_clicks=0, color="primary", size="sm"),
                ]
            ),
        ],
        id="equipment-modal",
        is_open=False,
    )


def _form_buttons(show_new: bool, show_edit: bool) -> list:
    return [
        dbc.Button("+ Add equipment", id="equipment-new", n_clicks=0, size="sm", color="primary", style=hidden_unless(show_new)),
        dbc.Button("Edit", id="equipment-edit", n_clicks=0, size="sm", color="secondary", style=hidden_unless(show_edit)),
    ]


def list_layout(store: MaintenanceStore, role: UserRole) -> html.Div:
    types = sorted({eq.type for eq in store.list_equipment()})
    return html.Div(
        [
            page_header(
                "Equipment",
                "Registered units, status and maintenance schedule",
                actions=_form_buttons(show_new=can_manage(role), show_edit=False),
            ),
            html.Div(id="equipment-feedback"),
            html.Div(id="equipment-form-result"),
            dbc.Row(
                [
                    search_field("equipment-search", "Name or location"),
                    select_field("equipment-filter-status", "Status", enum_options(EquipmentStatus)),
                    select_field("equipment-filter-type", "Type", value_options(types)),
                    result_count("equipment-count"),
                ],
                className="g-3 mb-3",
            ),
            html.Div(html.Div(id="equipment-table"), className="chart-card"),
            dcc.ConfirmDialog(id="equipment-confirm-delete"),
            dcc.Store(id="store-pending-delete"),
            dcc.Store(id="equipment-detail-id"),
            _equipment_modal(),
        ],
        style={"padding": "1.5rem"},
    )


def detail_layout(store: MaintenanceStore, equipment_id: str, role: UserRole) -> html.Div:
    """Raises RecordNotFoundError for an unknown `equipment_id`."""
    store.get_equipment(equipment_id)
    return html.Div(
        [
            html.Div(
                [
                    dcc.Link("‹ Back to list", href="/equipment", style={"fontSize": ".85rem"}),
                    html.Div(_form_buttons(show_new=False, show_edit=can_manage(role))),
                ],
                style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"},
            ),
            dcc.Store(id="equipment-detail-id", data=equipment_id),
            html.Div(id="equipment-detail-header", className="mt-2 mb-3"),
            html.Div(id="equipment-form-result"),
            dbc.Row(
                [
                    dbc.Col(html.Div(dcc.Graph(id="equipment-chart-vibration", config={"displayModeBar": False}), className="chart-card"), md=6),
                    dbc.Col(html.Div(dcc.Graph(id="equipment-chart-temperature", config={"displayModeBar": False}), className="chart-card"), md=6),
                ],
                className="g-3 mb-3",
            ),
            dbc.Row(
                [
                    dbc.Col(html.Div(dcc.Graph(id="equipment-chart-usage", config={"displayModeBar": False}), className="chart-card"), md=6),
                    dbc.Col(html.Div(dcc.Graph(id="equipment-chart-energy", config={"displayModeBar": False}), className="chart-card"), md=6),
                ],
                className="g-3 mb-3",
            ),
            dbc.Row(
                [
                    dbc.Col(html.Div([html.Div("Maintenance Tasks", className="chart-title"), html.Div(id="equipment-detail-tasks")], className="chart-card"), md=6),
                    dbc.Col(html.Div([html.Div("Maintenance History", className="chart-title"), html.Div(id="equipment-detail-logs")], className="chart-card"), md=6),
                ],
                className="g-3",
            ),
            _equipment_modal(),
        ],
        style={"padding": "1.5rem"},
    )
