"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Store bumped after every console command
  - dcc.Interval for live updates
  - Navbar + console page + footer
"""
from dash import dcc, html

from config.settings import settings
from src.layout.navbar import create_navbar
from src.pages import console


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Client-side state ─────────────────────────────────────────────
            dcc.Store(id="store-command-rev", data=0),

            # ── Live update interval ──────────────────────────────────────────
            dcc.Interval(
                id="interval-live",
                interval=settings.CONSOLE_REFRESH_MS,
                n_intervals=0,
            ),

            create_navbar(),

            html.Div(
                console.layout(),
                id="page-content",
                style={"minHeight": "calc(100vh - 60px)"},
            ),

            html.Footer(
                [
                    html.Span("Robotic Arm Digital Twin"),
                    html.Span(" · "),
                    html.Span("Simulated telemetry"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8b949e",
                    "borderTop": "1px solid #30363d",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
