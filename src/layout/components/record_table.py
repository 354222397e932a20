"""
src/layout/components/record_table.py
──────────────────────────────────────
Plain HTML table used by every list page, plus action buttons.
"""
from __future__ import annotations

from dash import html

BORDER = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"
DANGER = "#da3633"


def record_table(headers: list[str], rows: list[list], empty_message: str) -> html.Div:
    """
    Args:
        headers: Column titles
        rows: One list of cell contents per record, already in display order
        empty_message: Shown instead of the table when `rows` is empty
    """
    if not rows:
        return html.Div(
            empty_message,
            style={"color": MUTED, "padding": "20px", "textAlign": "center"},
        )

    body = [
        html.Tr(
            [html.Td(cell, style={"padding": "6px 8px", "verticalAlign": "middle"}) for cell in cells],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for cells in rows
    ]
    return html.Div(
        html.Table(
            [
                html.Thead(
                    html.Tr(
                        [html.Th(h, style={"padding": "6px 8px"}) for h in headers],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )
                ),
                html.Tbody(body),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto"},
    )


def action_button(label: str, button_type: str, record_id: str, color: str = ACCENT, disabled: bool = False) -> html.Button:
    """Small outline button addressed by a pattern-matching id."""
    return html.Button(
        label,
        id={"type": button_type, "index": record_id},
        n_clicks=0,
        disabled=disabled,
        style={
            "fontSize": ".68rem",
            "fontWeight": "600",
            "color": color,
            "background": "transparent",
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "2px 8px",
            "marginRight": "4px",
            "cursor": "default" if disabled else "pointer",
            "opacity": "0.6" if disabled else "1",
        },
    )


def muted(text: str) -> html.Span:
    return html.Span(text, style={"color": MUTED, "fontSize": ".78rem"})


def fmt_date(value) -> str:
    return value.strftime("%d/%m/%Y") if value else "—"


def fmt_datetime(value) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else "—"
