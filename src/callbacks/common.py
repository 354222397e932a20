"""
src/callbacks/common.py
────────────────────────
Helpers shared by the callback modules.
"""
from __future__ import annotations

import logging
from datetime import UTC, date, datetime

import dash_bootstrap_components as dbc
from dash import ctx
from dash.exceptions import PreventUpdate
from pydantic import ValidationError

from config.roles import UserRole
from config.settings import settings
from src.data.models import User
from src.data.store import MaintenanceStore
from src.errors import MaintenanceError, RecordNotFoundError

logger = logging.getLogger(__name__)


def current_user(store: MaintenanceStore, user_id: str | None) -> User:
    """The selected user; unknown ids fall back to the default user."""
    try:
        return store.get_user(user_id or settings.DEFAULT_USER_ID)
    except RecordNotFoundError:
        return store.get_user(settings.DEFAULT_USER_ID)


def current_role(store: MaintenanceStore, user_id: str | None) -> UserRole:
    return current_user(store, user_id).role


def clicked_index() -> str:
    """
    Record id of the pattern-matched button that fired the callback.

    Re-rendered tables recreate their buttons with n_clicks=0, which also
    fires pattern callbacks; those are ignored.
    """
    if not isinstance(ctx.triggered_id, dict) or not ctx.triggered[0]["value"]:
        raise PreventUpdate
    return ctx.triggered_id["index"]


def error_alert(exc: MaintenanceError) -> dbc.Alert:
    logger.warning("%s: %s", type(exc).__name__, exc)
    return dbc.Alert(str(exc), color="danger", dismissable=True, className="py-2")


def success_alert(message: str) -> dbc.Alert:
    return dbc.Alert(message, color="success", dismissable=True, duration=4000, className="py-2")


def parse_date(value: str | None) -> datetime | None:
    """DatePickerSingle value ("YYYY-MM-DD") → midnight UTC."""
    if not value:
        return None
    return datetime.combine(date.fromisoformat(value[:10]), datetime.min.time(), tzinfo=UTC)


def count_label(shown: int, total: int, noun: str) -> str:
    return f"{shown} of {total} {noun}"


def validation_alert(exc: ValidationError) -> dbc.Alert:
    """Form-level feedback for a record that failed model validation."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'form'}: {err['msg']}" for err in exc.errors()
    )
    return dbc.Alert(f"Please check the form. {problems}", color="warning", dismissable=True, className="py-2")
