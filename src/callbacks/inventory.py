"""
src/callbacks/inventory.py
───────────────────────────
Inventory page callbacks: parts table, create/edit dialog, delete.
"""
from __future__ import annotations

from dash import ALL, Input, Output, State, ctx, no_update
from dash.exceptions import PreventUpdate
from pydantic import ValidationError

from config.roles import can_manage
from src.analytics.views import INVENTORY_VIEW, StockLevel, stock_level
from src.callbacks.common import (
    clicked_index,
    count_label,
    current_role,
    error_alert,
    success_alert,
    validation_alert,
)
from src.data.models import SparePart
from src.data.store import MaintenanceStore
from src.errors import MaintenanceError
from src.layout.components.badges import badge
from src.layout.components.record_table import DANGER, action_button, muted, record_table

FORM_FIELDS = ("name", "sku", "qty", "reorder", "supplier", "price", "location")

STOCK_BADGES = {
    StockLevel.OUT_OF_STOCK: ("Out of stock", "#da3633"),
    StockLevel.LOW_STOCK: ("Low stock", "#e8a020"),
    StockLevel.IN_STOCK: ("In stock", "#2ea44f"),
}


def stock_badge(part: SparePart):
    return badge(*STOCK_BADGES[stock_level(part)])


def _form_values(part: SparePart) -> tuple:
    return (
        part.name,
        part.sku,
        part.quantity_in_stock,
        part.reorder_level,
        part.supplier,
        part.price,
        part.location or "",
    )


def register(app, store: MaintenanceStore) -> None:

    @app.callback(
        [
            Output("inventory-table", "children"),
            Output("inventory-count", "children"),
        ],
        [
            Input("inventory-search", "value"),
            Input("inventory-filter-stock", "value"),
            Input("store-revision", "data"),
        ],
        State("store-user", "data"),
    )
    def update_inventory_table(search, stock, revision, user_id):
        records = store.list_parts()
        try:
            selected = INVENTORY_VIEW.run(records, INVENTORY_VIEW.spec(search, {"stock": stock}))
        except MaintenanceError as exc:
            return error_alert(exc), ""

        manage = can_manage(current_role(store, user_id))
        rows = []
        for p in selected:
            actions = [
                action_button("Edit", "part-edit-btn", p.id),
                action_button("Delete", "part-delete-btn", p.id, color=DANGER),
            ] if manage else []
            rows.append(
                [
                    p.name,
                    muted(p.sku),
                    str(p.quantity_in_stock),
                    str(p.reorder_level),
                    stock_badge(p),
                    p.supplier or muted("—"),
                    f"${p.price:,.2f}",
                    muted(p.location or "—"),
                    actions,
                ]
            )
        table = record_table(
            ["Name", "SKU", "In Stock", "Reorder At", "Stock", "Supplier", "Price", "Location", ""],
            rows,
            "No parts match the current filters.",
        )
        return table, count_label(len(selected), len(records), "parts")

    @app.callback(
        [
            Output("part-modal", "is_open"),
            Output("part-modal-title", "children"),
            Output("part-form-id", "data"),
            *[Output(f"part-form-{name}", "value") for name in FORM_FIELDS],
            Output("part-form-feedback", "children"),
            Output("inventory-feedback", "children"),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        [
            Input("part-new", "n_clicks"),
            Input({"type": "part-edit-btn", "index": ALL}, "n_clicks"),
            Input("part-form-cancel", "n_clicks"),
            Input("part-form-save", "n_clicks"),
        ],
        [
            State("part-form-id", "data"),
            *[State(f"part-form-{name}", "value") for name in FORM_FIELDS],
            State("store-revision", "data"),
        ],
        prevent_initial_call=True,
    )
    def handle_part_form(
        n_new, n_edit, n_cancel, n_save,
        part_id, name, sku, qty, reorder, supplier, price, location,
        revision,
    ):
        unchanged = (no_update,) * len(FORM_FIELDS)
        trigger = ctx.triggered_id

        if trigger == "part-new":
            return True, "New Part", None, "", "", 0, 0, "", 0.0, "", None, no_update, no_update

        if isinstance(trigger, dict):
            try:
                part = store.get_part(clicked_index())
            except MaintenanceError as exc:
                return False, no_update, None, *unchanged, None, error_alert(exc), no_update
            return True, "Edit Part", part.id, *_form_values(part), None, no_update, no_update

        if trigger == "part-form-cancel":
            return False, no_update, None, *unchanged, None, no_update, no_update

        if trigger != "part-form-save" or not n_save:
            raise PreventUpdate

        try:
            part = store.save_part(
                SparePart(
                    id=part_id or "",
                    name=(name or "").strip(),
                    sku=(sku or "").strip(),
                    quantity_in_stock=qty if qty is not None else 0,
                    reorder_level=reorder if reorder is not None else 0,
                    supplier=supplier or "",
                    price=price if price is not None else 0.0,
                    location=location or None,
                )
            )
        except ValidationError as exc:
            return True, no_update, part_id, *unchanged, validation_alert(exc), no_update, no_update

        verb = "Updated" if part_id else "Added"
        return (
            False, no_update, None, *unchanged, None,
            success_alert(f"{verb} {part.name}."),
            (revision or 0) + 1,
        )

    @app.callback(
        [
            Output("inventory-feedback", "children", allow_duplicate=True),
            Output("store-revision", "data", allow_duplicate=True),
        ],
        Input({"type": "part-delete-btn", "index": ALL}, "n_clicks"),
        State("store-revision", "data"),
        prevent_initial_call=True,
    )
    def delete_part(n_clicks: list, revision: int):
        part_id = clicked_index()
        try:
            store.delete_part(part_id)
        except MaintenanceError as exc:
            return error_alert(exc), no_update
        return success_alert("Part deleted."), (revision or 0) + 1
