"""
src/callbacks/console.py
────────────────────────
Operator console callbacks: periodic refresh and command buttons.

The console is an ordinary engine client: it reads through
TwinEngine.status()/logs() and mutates only through engine commands.
"""
from __future__ import annotations

from datetime import datetime

import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, State, ctx, html

from config.faults import FAULT_LABELS, FaultSeverity
from src.data.models import LogEntry
from src.layout.components.health_gauge import gauge_color, health_gauge
from src.layout.components.kpi_card import kpi_card
from src.layout.components.severity_badge import fault_badge, log_badge
from src.layout.navbar import status_pill
from src.simulation.engine import TwinEngine

BORDER = "#30363d"
MUTED = "#8b949e"

FAULT_BUTTON_COLORS = {
    FaultSeverity.OK.value: "success",
    FaultSeverity.WARNING.value: "warning",
    FaultSeverity.CRITICAL.value: "danger",
}


def fault_button_state(key: str, severity: str) -> tuple[str, str]:
    """(label, bootstrap color) for a fault toggle button."""
    return f"{FAULT_LABELS[key]} · {severity}", FAULT_BUTTON_COLORS.get(severity, "secondary")


def _format_ts(ts: datetime) -> str:
    return ts.astimezone().strftime("%d/%m %H:%M:%S")


def build_log_table(entries: list[LogEntry]) -> html.Div:
    if not entries:
        return html.Div(
            "No maintenance events recorded.",
            style={"color": MUTED, "padding": "20px", "textAlign": "center"},
        )

    rows = [
        html.Tr(
            [
                html.Td(_format_ts(entry.timestamp), style={"color": MUTED, "fontSize": ".78rem"}),
                html.Td(log_badge(entry.severity.value)),
                html.Td(entry.message, style={"fontSize": ".82rem"}),
            ],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for entry in entries
    ]
    return html.Div(
        html.Table(
            [
                html.Thead(
                    html.Tr(
                        [html.Th(h) for h in ["Time", "Severity", "Message"]],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )
                ),
                html.Tbody(rows),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto", "maxHeight": "420px", "overflowY": "auto"},
    )


def build_kpis(status: dict) -> html.Div:
    state, lifetime = status["stateHealth"], status["lifetimeHealth"]
    active = status["activeFaults"]
    cards = [
        kpi_card(
            "State Health", f"{state:.1f}%", color=gauge_color(state),
            sub_label="current frame + faults", progress=state,
        ),
        kpi_card(
            "Lifetime Health", f"{lifetime:.2f}%", color=gauge_color(lifetime),
            sub_label="cumulative wear", progress=lifetime,
        ),
        kpi_card(
            "Active Faults", str(len(active)),
            color="#da3633" if active else "#2ea44f",
            sub_label=f"{status['frameCount']} frames in window",
        ),
    ]
    badges = [
        html.Span([FAULT_LABELS[key], " ", fault_badge(status["faults"][key])], className="me-3")
        for key in active
    ]
    return html.Div(
        [
            dbc.Row([dbc.Col(card, xs=12, md=4) for card in cards], className="g-2"),
            html.Div(badges, style={"fontSize": ".75rem", "color": MUTED, "marginTop": "8px"}),
        ]
    )


def register(app, engine: TwinEngine) -> None:
    """Register console callbacks bound to `engine`."""

    @app.callback(
        [
            Output("navbar-status", "children"),
            Output("console-shutdown-banner", "children"),
            Output("console-gauge", "children"),
            Output("console-kpis", "children"),
            Output("console-log-table", "children"),
            Output({"type": "fault-btn", "key": ALL}, "children"),
            Output({"type": "fault-btn", "key": ALL}, "color"),
            Output({"type": "fault-btn", "key": ALL}, "disabled"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("store-command-rev", "data"),
        ],
    )
    def refresh_console(n_intervals: int, rev: int):
        status = engine.status()
        is_shutdown = status["isShutdown"]

        banner = (
            dbc.Alert("System is shut down. Restart to resume the simulation.", color="danger")
            if is_shutdown
            else None
        )

        keys = [out["id"]["key"] for out in ctx.outputs_list[5]]
        states = [fault_button_state(key, status["faults"][key]) for key in keys]

        return (
            status_pill(is_shutdown),
            banner,
            health_gauge(status),
            build_kpis(status),
            build_log_table(engine.logs()),
            [label for label, _ in states],
            [color for _, color in states],
            [is_shutdown] * len(keys),
        )

    @app.callback(
        Output("store-command-rev", "data"),
        [
            Input({"type": "fault-btn", "key": ALL}, "n_clicks"),
            Input("console-restart-btn", "n_clicks"),
            Input("console-shutdown-btn", "n_clicks"),
            Input("console-clear-log-btn", "n_clicks"),
        ],
        State("store-command-rev", "data"),
        prevent_initial_call=True,
    )
    def run_command(fault_clicks: list, restart: int, shutdown: int, clear: int, rev: int) -> int:
        if not ctx.triggered_id or not ctx.triggered[0]["value"]:
            return rev
        trigger = ctx.triggered_id
        if isinstance(trigger, dict):
            engine.toggle_fault(trigger["key"])
        elif trigger == "console-restart-btn":
            engine.restart()
        elif trigger == "console-shutdown-btn":
            engine.shutdown()
        elif trigger == "console-clear-log-btn":
            engine.clear_logs()
        return (rev or 0) + 1
