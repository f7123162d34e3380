"""
src/layout/components/health_gauge.py
──────────────────────────────────────
Published health gauge showing how state health and lifetime wear combine.

  bar        published health = min(state, lifetime)
  band       0 → state health (light shading)
  marker     lifetime wear floor
  delta      published health relative to the lifetime floor
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc

CARD_BG = "#161b22"
MUTED = "#8b949e"
SHUTDOWN_GREY = "#484f58"

# (lower bound, color), best first
HEALTH_BANDS = [
    (80.0, "#2ea44f"),
    (60.0, "#58a6ff"),
    (40.0, "#e8a020"),
    (20.0, "#f0883e"),
    (0.0, "#da3633"),
]


def gauge_color(health: float) -> str:
    for floor, color in HEALTH_BANDS:
        if health >= floor:
            return color
    return HEALTH_BANDS[-1][1]


def limiting_factor(state_health: float, lifetime_health: float) -> str:
    """Which component currently sets the published health."""
    return "wear" if lifetime_health <= state_health else "state"


def gauge_title(status: dict) -> str:
    if status["isShutdown"]:
        return "SHUT DOWN"
    return f"Limited by {limiting_factor(status['stateHealth'], status['lifetimeHealth'])}"


def health_gauge(status: dict, height: int = 240) -> dcc.Graph:
    """
    Gauge for one engine status view.

    Args:
        status: TwinEngine.status() payload
        height: Figure height in px
    """
    health = status["health"]
    state = status["stateHealth"]
    lifetime = status["lifetimeHealth"]
    color = SHUTDOWN_GREY if status["isShutdown"] else gauge_color(health)

    fig = go.Figure(go.Indicator(
        mode="gauge+number+delta",
        value=round(health, 2),
        number={"suffix": "%", "font": {"color": color, "size": 30}},
        delta={
            "reference": round(lifetime, 2),
            "valueformat": ".1f",
            "decreasing": {"color": "#da3633"},
            "increasing": {"color": "#2ea44f"},
        },
        title={"text": gauge_title(status), "font": {"color": MUTED, "size": 12}},
        gauge={
            "axis": {"range": [0, 100], "tickcolor": "#30363d", "tickfont": {"color": MUTED, "size": 9}},
            "bar": {"color": color, "thickness": 0.3},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": [{"range": [0, state], "color": "rgba(88,166,255,0.12)"}],
            "threshold": {
                "line": {"color": "#f0883e", "width": 3},
                "thickness": 0.85,
                "value": lifetime,
            },
        },
    ))

    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=24, r=24, t=48, b=16),
        height=height,
        font=dict(color="#c9d1d9"),
    )

    return dcc.Graph(
        id="console-gauge-graph",
        figure=fig,
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
    )
