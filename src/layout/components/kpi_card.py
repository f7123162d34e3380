"""
src/layout/components/kpi_card.py
──────────────────────────────────
Console metric cards. Health metrics carry a 0–100 progress bar.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"

LABEL_STYLE = {"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}


def progress_color(value: float) -> str:
    """Bootstrap contextual color for a 0–100 health bar."""
    if value >= 80:
        return "success"
    if value >= 60:
        return "info"
    if value >= 20:
        return "warning"
    return "danger"


def kpi_card(
    label: str,
    value: str,
    color: str = "#c9d1d9",
    sub_label: str = "",
    progress: float | None = None,
) -> dbc.Card:
    """
    Args:
        label: Metric name
        value: Formatted value
        color: Value text color
        sub_label: Secondary caption under the value
        progress: Optional 0–100 fill for a health bar
    """
    body = [
        html.Div(label, style=LABEL_STYLE),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color}),
    ]
    if progress is not None:
        body.append(
            dbc.Progress(
                value=max(0.0, min(100.0, progress)),
                style={"height": "4px", "backgroundColor": BORDER, "marginTop": "6px"},
                color=progress_color(progress),
            )
        )
    if sub_label:
        body.append(html.Div(sub_label, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "4px"}))

    return dbc.Card(
        dbc.CardBody(body, style={"padding": "12px 14px"}),
        style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px"},
    )
