"""
src/layout/navbar.py
─────────────────────
Top bar with brand and live run-state pill.
"""

import dash_bootstrap_components as dbc
from dash import html

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                dbc.NavbarBrand(
                    [
                        html.Span("🦾", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span(
                            "Arm Twin", style={"fontWeight": "700", "letterSpacing": ".04em"}
                        ),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                html.Div(id="navbar-status", className="ms-auto"),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )


def status_pill(is_shutdown: bool) -> html.Span:
    color = "#da3633" if is_shutdown else "#2ea44f"
    return html.Span(
        "SHUTDOWN" if is_shutdown else "RUNNING",
        style={
            "fontSize": ".7rem",
            "fontWeight": "700",
            "letterSpacing": ".06em",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "10px",
            "padding": "2px 10px",
        },
    )
