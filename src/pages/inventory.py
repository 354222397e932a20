"""
src/pages/inventory.py
───────────────────────
Spare-parts inventory with stock-level filter and the part dialog.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.roles import UserRole, can_manage
from src.analytics.views import StockLevel
from src.layout.components.filters import (
    LABEL_STYLE,
    enum_options,
    hidden_unless,
    page_header,
    result_count,
    search_field,
    select_field,
)


def _part_modal() -> dbc.Modal:
    def field(label: str, control) -> html.Div:
        return html.Div([html.Label(label, style=LABEL_STYLE), control], className="mb-2")

    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(id="part-modal-title")),
            dbc.ModalBody(
                [
                    dcc.Store(id="part-form-id"),
                    html.Div(id="part-form-feedback"),
                    field("Name", dbc.Input(id="part-form-name")),
                    field("SKU", dbc.Input(id="part-form-sku")),
                    dbc.Row(
                        [
                            dbc.Col(field("In stock", dbc.Input(id="part-form-qty", type="number", min=0, step=1))),
                            dbc.Col(field("Reorder level", dbc.Input(id="part-form-reorder", type="number", min=0, step=1))),
                        ]
                    ),
                    field("Supplier", dbc.Input(id="part-form-supplier")),
                    dbc.Row(
                        [
                            dbc.Col(field("Unit price", dbc.Input(id="part-form-price", type="number", min=0, step=0.01))),
                            dbc.Col(field("Location", dbc.Input(id="part-form-location"))),
                        ]
                    ),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id="part-form-cancel", n_clicks=0, color="secondary", size="sm"),
                    dbc.Button("Save", id="part-form-save", n_clicks=0, color="primary", size="sm"),
                ]
            ),
        ],
        id="part-modal",
        is_open=False,
    )


def layout(role: UserRole) -> html.Div:
    return html.Div(
        [
            page_header(
                "Spare Parts Inventory",
                "Stock levels, reorder points and suppliers",
                actions=[
                    dbc.Button(
                        "+ New part", id="part-new", n_clicks=0, size="sm", color="primary",
                        style=hidden_unless(can_manage(role)),
                    )
                ],
            ),
            html.Div(id="inventory-feedback"),
            dbc.Row(
                [
                    search_field("inventory-search", "Name, SKU or supplier"),
                    select_field("inventory-filter-stock", "Stock status", enum_options(StockLevel), md=3),
                    result_count("inventory-count"),
                ],
                className="g-3 mb-3",
            ),
            html.Div(html.Div(id="inventory-table"), className="chart-card"),
            _part_modal(),
        ],
        style={"padding": "1.5rem"},
    )
