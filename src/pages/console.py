"""
src/pages/console.py
─────────────────────
Operator console: health, fault injection, run control and maintenance log.

Static structure; dynamic data injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import html

from config.faults import FAULT_KEYS, FAULT_LABELS

MUTED = "#8b949e"


def _fault_button(key: str) -> dbc.Col:
    return dbc.Col(
        dbc.Button(
            FAULT_LABELS[key],
            id={"type": "fault-btn", "key": key},
            n_clicks=0,
            outline=True,
            color="success",
            size="sm",
            className="w-100",
        ),
        xs=6,
        md=4,
    )


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Robotic Arm Console", className="page-title"),
                    html.P(
                        "Live health of the simulated arm · fault injection · maintenance log",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            html.Div(id="console-shutdown-banner", className="mb-3"),
            # ── Health row ────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Health", className="chart-title"),
                                html.Div(id="console-gauge"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(html.Div(id="console-kpis"), md=8),
                ],
                className="g-3 mb-3",
            ),
            # ── Fault injection ───────────────────────────────────────────────
            html.Div(
                [
                    html.Div("Fault Injection", className="chart-title"),
                    dbc.Row([_fault_button(key) for key in FAULT_KEYS], className="g-2"),
                    html.Div(
                        "Each click cycles OK → Warning → Critical → OK",
                        style={"fontSize": ".68rem", "color": MUTED, "marginTop": "6px"},
                    ),
                ],
                className="chart-card mb-3",
            ),
            # ── Run control ───────────────────────────────────────────────────
            html.Div(
                [
                    dbc.Button("Restart", id="console-restart-btn", n_clicks=0, color="primary", size="sm"),
                    dbc.Button(
                        "Shutdown", id="console-shutdown-btn", n_clicks=0, color="danger", size="sm",
                        className="ms-2",
                    ),
                    dbc.Button(
                        "Clear log", id="console-clear-log-btn", n_clicks=0, color="secondary",
                        outline=True, size="sm", className="ms-2",
                    ),
                ],
                className="mb-3",
            ),
            # ── Maintenance log ───────────────────────────────────────────────
            html.Div(
                [
                    html.Div("Maintenance Log", className="chart-title"),
                    html.Div(id="console-log-table"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
