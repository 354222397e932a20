"""
src/layout/components/metric_chart.py
──────────────────────────────────────
Single-metric trend chart with optional risk threshold lines.
"""
from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
from dash import dcc

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"


def base_layout(title: str = "", height: int = 220) -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 30, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "title": {"text": title, "font": {"size": 12, "color": MUTED}},
        "xaxis": {"gridcolor": GRID_CLR, "showgrid": True},
        "yaxis": {"gridcolor": GRID_CLR, "showgrid": True},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}},
        "height": height,
    }


def metric_figure(
    df: pd.DataFrame,
    column: str,
    title: str,
    color: str = "#58a6ff",
    medium: float | None = None,
    high: float | None = None,
    height: int = 220,
) -> go.Figure:
    """
    Line chart of `column` over `timestamp`.

    Args:
        df: Frame from simulator.to_dataframe()
        column: Metric column to plot
        medium/high: Risk thresholds drawn as horizontal lines
    """
    fig = go.Figure()
    if df.empty:
        fig.update_layout(**base_layout(f"{title} · no data", height))
        return fig

    fig.add_scatter(
        x=df["timestamp"], y=df[column],
        line={"color": color, "width": 1.5},
        name=column,
        mode="lines",
        hovertemplate="%{x|%d/%m %H:%M}<br>%{y:.2f}<extra></extra>",
    )
    if medium is not None:
        fig.add_hline(y=medium, line_dash="dot", line_color="#e8a020", line_width=1,
                      annotation_text="Medium", annotation_font_color="#e8a020", annotation_font_size=9)
    if high is not None:
        fig.add_hline(y=high, line_dash="solid", line_color="#da3633", line_width=1,
                      annotation_text="High", annotation_font_color="#da3633", annotation_font_size=9)

    fig.update_layout(**base_layout(title, height))
    return fig


def metric_chart(df: pd.DataFrame, column: str, title: str, **kwargs) -> dcc.Graph:
    height = kwargs.get("height", 220)
    return dcc.Graph(
        figure=metric_figure(df, column, title, **kwargs),
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
    )
