"""
src/layout/main.py
───────────────────
Root layout: client-side state, routing, telemetry interval, navbar, page slot.

Client-side state:
  store-user      selected user id (drives the role)
  store-revision  bumped by every callback that mutates the record store
  store-tick      bumped after every telemetry tick
"""
from dash import dcc, html

from config.settings import settings
from src.data.models import User
from src.layout.navbar import create_navbar

PAGE_BG = "#0d1117"
MUTED = "#8b949e"
BORDER = "#30363d"


def _client_state() -> list:
    return [
        dcc.Store(id="store-user", data=settings.DEFAULT_USER_ID),
        dcc.Store(id="store-revision", data=0),
        dcc.Store(id="store-tick", data=0),
        dcc.Location(id="url", refresh=False),
        dcc.Interval(id="interval-live", interval=settings.UPDATE_INTERVAL_MS, n_intervals=0),
    ]


def _footer() -> html.Footer:
    seconds = settings.UPDATE_INTERVAL_MS / 1000
    return html.Footer(
        " · ".join(
            [
                "Equipment Maintenance Dashboard",
                f"Simulated telemetry every {seconds:g} s",
                f"Service interval {settings.SERVICE_INTERVAL_MONTHS} months",
            ]
        ),
        style={
            "textAlign": "center",
            "padding": ".7rem",
            "fontSize": ".72rem",
            "color": MUTED,
            "borderTop": f"1px solid {BORDER}",
            "marginTop": "2rem",
        },
    )


def create_layout(users: list[User]) -> html.Div:
    """Assemble the root application layout; `users` feed the role switcher."""
    return html.Div(
        [
            *_client_state(),
            create_navbar(users),
            html.Div(id="page-content", style={"minHeight": "calc(100vh - 60px)"}),
            _footer(),
        ],
        style={"backgroundColor": PAGE_BG, "minHeight": "100vh", "color": "#c9d1d9"},
    )
