"""
src/layout/components/badges.py
────────────────────────────────
Color-coded inline badges for status, risk, severity and priority.
"""

from dash import html

from config.alerts import SEVERITY_COLORS
from src.data.models import EquipmentStatus, RiskLevel, TaskPriority, TaskStatus

MUTED = "#8b949e"

STATUS_COLORS: dict[str, str] = {
    EquipmentStatus.OK: "#2ea44f",
    EquipmentStatus.WARNING: "#e8a020",
    EquipmentStatus.CRITICAL: "#da3633",
    EquipmentStatus.MAINTENANCE: "#58a6ff",
    EquipmentStatus.OFFLINE: "#8b949e",
}

RISK_COLORS: dict[str, str] = {
    RiskLevel.LOW: "#2ea44f",
    RiskLevel.MEDIUM: "#e8a020",
    RiskLevel.HIGH: "#da3633",
}

PRIORITY_COLORS: dict[str, str] = {
    TaskPriority.LOW: "#58a6ff",
    TaskPriority.MEDIUM: "#e8a020",
    TaskPriority.HIGH: "#da3633",
}

TASK_STATUS_COLORS: dict[str, str] = {
    TaskStatus.PENDING: "#e8a020",
    TaskStatus.IN_PROGRESS: "#58a6ff",
    TaskStatus.COMPLETED: "#2ea44f",
    TaskStatus.OVERDUE: "#da3633",
}


def badge(label: str, color: str = MUTED) -> html.Span:
    """Inline badge with color-coded border."""
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


def status_badge(status: EquipmentStatus) -> html.Span:
    return badge(status.value, STATUS_COLORS.get(status, MUTED))


def risk_badge(risk: RiskLevel) -> html.Span:
    return badge(f"{risk.value} risk", RISK_COLORS.get(risk, MUTED))


def severity_badge(severity) -> html.Span:
    return badge(severity.value, SEVERITY_COLORS.get(severity, MUTED))


def priority_badge(priority: TaskPriority) -> html.Span:
    return badge(priority.value, PRIORITY_COLORS.get(priority, MUTED))


def task_status_badge(status: TaskStatus) -> html.Span:
    return badge(status.value, TASK_STATUS_COLORS.get(status, MUTED))
