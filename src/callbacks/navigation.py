"""
src/callbacks/navigation.py
────────────────────────────
Routing, role switching and the telemetry tick.
"""
from __future__ import annotations

import logging

from dash import Input, Output, State

from config.roles import can_access
from src.callbacks.common import current_role
from src.data.store import MaintenanceStore
from src.errors import RecordNotFoundError
from src.layout.navbar import nav_links
from src.pages import access_denied, alerts, dashboard, equipment, inventory, logs, reports, schedule

logger = logging.getLogger(__name__)

EQUIPMENT_PREFIX = "/equipment/"


def register(app, store: MaintenanceStore) -> None:
    """Register navigation callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
        Input("store-user", "data"),
    )
    def display_page(pathname: str | None, user_id: str):
        pathname = pathname or "/"
        role = current_role(store, user_id)
        if not can_access(role, pathname):
            logger.debug("Rejected route %s for role %s", pathname, role.value)
            return access_denied.layout()

        if pathname.startswith(EQUIPMENT_PREFIX):
            try:
                return equipment.detail_layout(store, pathname[len(EQUIPMENT_PREFIX):], role)
            except RecordNotFoundError:
                logger.debug("Rejected route %s: unknown equipment", pathname)
                return access_denied.layout()

        routes = {
            "/": dashboard.layout,
            "/equipment": lambda: equipment.list_layout(store, role),
            "/schedule": lambda: schedule.layout(store, role),
            "/alerts": alerts.layout,
            "/logs": lambda: logs.layout(store, role),
            "/inventory": lambda: inventory.layout(role),
            "/reports": reports.layout,
        }
        return routes[pathname]()

    # ── Role switcher ─────────────────────────────────────────────────────────
    @app.callback(
        Output("store-user", "data"),
        Input("user-selector", "value"),
        prevent_initial_call=True,
    )
    def select_user(user_id: str) -> str:
        return user_id

    @app.callback(
        Output("nav-links", "children"),
        Input("store-user", "data"),
    )
    def render_nav(user_id: str) -> list:
        return nav_links(current_role(store, user_id))

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Telemetry tick ────────────────────────────────────────────────────────
    @app.callback(
        Output("store-tick", "data"),
        Input("interval-live", "n_intervals"),
        State("store-tick", "data"),
        prevent_initial_call=True,
    )
    def advance_telemetry(n_intervals: int, tick: int | None) -> int:
        store.tick()
        return (tick or 0) + 1
