"""
src/layout/navbar.py
─────────────────────
Navigation bar with role-filtered page links and the user (role) switcher.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.roles import UserRole, nav_items_for
from config.settings import settings
from src.data.models import User

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"


def nav_links(role: UserRole | str) -> list:
    """NavItems visible to `role`; rendered by the navigation callback."""
    return [
        dbc.NavItem(
            dbc.NavLink(
                [html.Span(item.icon, style={"marginRight": "6px"}), item.name],
                href=item.path,
                active="exact",
            )
        )
        for item in nav_items_for(role)
    ]


def create_navbar(users: list[User]) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                # Brand
                dbc.NavbarBrand(
                    [
                        html.Span("⚙", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span(
                            "Maintenance", style={"fontWeight": "700", "letterSpacing": ".04em"}
                        ),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    [
                        dbc.Nav(id="nav-links", className="ms-auto", navbar=True),
                        # User / role switcher
                        html.Div(
                            dcc.Dropdown(
                                id="user-selector",
                                options=[
                                    {"label": f"{u.name} ({u.role.value})", "value": u.id}
                                    for u in users
                                ],
                                value=settings.DEFAULT_USER_ID,
                                clearable=False,
                                style={"minWidth": "220px", "fontSize": ".8rem", "color": "#0d1117"},
                            ),
                            style={"marginLeft": "12px"},
                        ),
                    ],
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )
