"""
src/pages/access_denied.py
───────────────────────────
Shown for unknown routes and routes the current role may not open.
"""
from dash import dcc, html


def layout() -> html.Div:
    return html.Div(
        [
            html.H2("Access Denied or Page Not Found", style={"color": "#da3633"}),
            html.P(
                "You do not have permission to view this page, or the page does not exist.",
                style={"color": "#8b949e"},
            ),
            dcc.Link("Go to Dashboard", href="/"),
        ],
        style={"padding": "3rem", "textAlign": "center"},
    )
