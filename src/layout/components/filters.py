"""
src/layout/components/filters.py
─────────────────────────────────
Filter-bar controls shared by the list pages.
"""
from __future__ import annotations

from enum import Enum

import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8b949e"

ALL_OPTION = {"label": "All", "value": "ALL"}

LABEL_STYLE = {
    "fontSize": ".72rem",
    "color": MUTED,
    "textTransform": "uppercase",
}


def _label(value: str) -> str:
    # Machine-style values such as LOW_STOCK read as "Low Stock"
    return value.replace("_", " ").title() if value.isupper() and len(value) > 2 else value


def enum_options(enum_cls: type[Enum], include_all: bool = True) -> list[dict]:
    options = [{"label": _label(member.value), "value": member.value} for member in enum_cls]
    return [ALL_OPTION, *options] if include_all else options


def value_options(values, include_all: bool = True) -> list[dict]:
    options = [{"label": str(v), "value": v} for v in values]
    return [ALL_OPTION, *options] if include_all else options


def search_field(control_id: str, placeholder: str = "Search…", md: int = 4) -> dbc.Col:
    return dbc.Col(
        [
            html.Label("Search", style=LABEL_STYLE),
            dbc.Input(id=control_id, type="search", placeholder=placeholder, debounce=True, size="sm"),
        ],
        md=md,
    )


def select_field(control_id: str, label: str, options: list[dict], value: str = "ALL", md: int = 2) -> dbc.Col:
    return dbc.Col(
        [
            html.Label(label, style=LABEL_STYLE),
            dcc.Dropdown(
                id=control_id,
                options=options,
                value=value,
                clearable=False,
                style={"fontSize": ".85rem", "color": "#0d1117"},
            ),
        ],
        md=md,
    )


def result_count(control_id: str) -> dbc.Col:
    return dbc.Col(
        html.Div(id=control_id, style={"fontSize": ".78rem", "color": MUTED, "paddingTop": "26px"}),
        md=2,
    )


def page_header(title: str, subtitle: str, actions: list | None = None) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2(title, className="page-title"),
                    html.P(subtitle, className="page-subtitle"),
                ]
            ),
            html.Div(actions or []),
        ],
        className="page-header",
        style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"},
    )


def hidden_unless(allowed: bool) -> dict:
    """Style that hides a control the current role may not use (it stays in the layout)."""
    return {} if allowed else {"display": "none"}
