"""
src/layout/components/kpi_card.py
──────────────────────────────────
KPI cards for the dashboard banner and the per-unit cards.
"""
from dash import dcc, html

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
TEXT = "#c9d1d9"
OK_COLOR = "#2ea44f"

_CAPTION = {"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}
_FIGURE = {"fontSize": "1.4rem", "fontWeight": "700", "lineHeight": "1.2", "marginTop": "2px"}


def kpi_card(
    label: str,
    value: str,
    color: str = TEXT,
    icon: str = "",
    sub_label: str = "",
    border_color: str = BORDER,
    href: str | None = None,
) -> html.Div | dcc.Link:
    """
    Args:
        label: Caption above the value
        value: Pre-formatted value
        color: Value (and icon) colour
        sub_label: Optional qualifier under the value
        border_color: Card outline
        href: When set, the whole card links to this page
    """
    body = [
        html.Div(icon, style={"fontSize": "1.4rem", "marginBottom": "4px", "color": color}) if icon else None,
        html.Div(label, style=_CAPTION),
        html.Div(value, style={**_FIGURE, "color": color}),
        html.Div(sub_label, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "2px"}) if sub_label else None,
    ]
    card = html.Div(
        [child for child in body if child is not None],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border_color}",
            "borderRadius": "8px",
            "padding": "14px 16px",
            "minWidth": "120px",
            "height": "100%",
        },
    )
    return dcc.Link(card, href=href, style={"textDecoration": "none"}) if href else card


def count_card(label: str, count: int, alarm_color: str, highlight: bool = False, **kwargs) -> html.Div | dcc.Link:
    """Count KPI that turns `alarm_color` when non-zero and green at zero."""
    color = alarm_color if count else OK_COLOR
    border = alarm_color if highlight and count else BORDER
    return kpi_card(label, str(count), color, border_color=border, **kwargs)


def mini_kpi(label: str, value: str, color: str = TEXT) -> html.Div:
    """Two-line caption/value pair used inside equipment cards."""
    return html.Div(
        [
            html.Div(label, style={**_CAPTION, "fontSize": ".62rem", "letterSpacing": "normal"}),
            html.Div(value, style={"fontSize": ".85rem", "fontWeight": "700", "color": color}),
        ]
    )
