"""
src/layout/components/severity_badge.py
────────────────────────────────────────
Color-coded badges for log severities and fault channel states.
"""

from dash import html

from config.faults import FAULT_COLORS, LOG_SEVERITY_COLORS


def _badge(label: str, color: str) -> html.Span:
    return html.Span(
        label,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )


def log_badge(severity: str) -> html.Span:
    """Inline badge for an INFO / HIGH / CRITICAL log entry."""
    return _badge(severity, LOG_SEVERITY_COLORS.get(severity, "#8b949e"))


def fault_badge(severity: str) -> html.Span:
    """Inline badge for an OK / Warning / Critical fault channel."""
    return _badge(severity, FAULT_COLORS.get(severity, "#8b949e"))
