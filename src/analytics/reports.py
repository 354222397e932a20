"""
src/analytics/reports.py
────────────────────────
Dashboard KPIs and manager reports.

The dashboard also charts each unit's predicted risk (risk_by_equipment).

Reports:
  equipment_status      — unit count per status
  maintenance_activity  — completed tasks / open tasks / total log entries
  health_trends         — mean temperature over each unit's last 7 samples
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

import pandas as pd

from config.alerts import AlertSeverity
from src.data.models import RISK_ORDER, EquipmentStatus, RiskLevel, TaskStatus
from src.data.simulator import to_dataframe
from src.data.store import MaintenanceStore

TREND_WINDOW = 7
OPEN_TASK_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


class ReportType(str, Enum):
    EQUIPMENT_STATUS = "equipment_status"
    MAINTENANCE_ACTIVITY = "maintenance_activity"
    HEALTH_TRENDS = "health_trends"


@dataclass(frozen=True)
class DashboardKpis:
    equipment_count: int
    error_alerts: int      # unacknowledged, severity Error
    warning_alerts: int    # unacknowledged, severity Warning
    upcoming_tasks: int    # not completed, due in the future
    at_risk: int           # status Critical or predicted risk High


def at_risk_equipment_ids(store: MaintenanceStore) -> list[str]:
    """Units whose status is Critical or whose predicted risk is High."""
    states = store.health_states()
    return [
        eq.id
        for eq in store.list_equipment()
        if eq.status == EquipmentStatus.CRITICAL
        or (eq.id in states and states[eq.id].predicted_risk == RiskLevel.HIGH)
    ]


def dashboard_kpis(store: MaintenanceStore, now: datetime | None = None) -> DashboardKpis:
    now = now or datetime.now(tz=UTC)
    alerts = [a for a in store.list_alerts() if not a.acknowledged]
    return DashboardKpis(
        equipment_count=len(store.list_equipment()),
        error_alerts=sum(a.severity == AlertSeverity.ERROR for a in alerts),
        warning_alerts=sum(a.severity == AlertSeverity.WARNING for a in alerts),
        upcoming_tasks=sum(
            t.status != TaskStatus.COMPLETED and t.due_date > now for t in store.list_tasks()
        ),
        at_risk=len(at_risk_equipment_ids(store)),
    )


def risk_by_equipment(store: MaintenanceStore) -> pd.DataFrame:
    """
    Columns: equipment_id, name, risk, score.

    `score` is 1 (Low), 2 (Medium) or 3 (High), the bar height on the dashboard.
    """
    states = store.health_states()
    rows = [
        {
            "equipment_id": eq.id,
            "name": eq.name,
            "risk": states[eq.id].predicted_risk.value,
            "score": RISK_ORDER[states[eq.id].predicted_risk] + 1,
        }
        for eq in store.list_equipment()
    ]
    return pd.DataFrame(rows, columns=["equipment_id", "name", "risk", "score"])


def equipment_status_summary(store: MaintenanceStore) -> pd.DataFrame:
    """Columns: name (status), value (count). Statuses with no units are omitted."""
    statuses = pd.Series([eq.status.value for eq in store.list_equipment()], dtype="object")
    if statuses.empty:
        return pd.DataFrame(columns=["name", "value"])
    counts = statuses.value_counts(sort=False)
    return pd.DataFrame({"name": counts.index, "value": counts.values.astype(int)})


def maintenance_activity(store: MaintenanceStore) -> pd.DataFrame:
    tasks = store.list_tasks()
    completed = sum(t.status == TaskStatus.COMPLETED for t in tasks)
    open_tasks = sum(t.status in OPEN_TASK_STATUSES for t in tasks)
    return pd.DataFrame(
        {
            "name": ["Completed Tasks", "Pending/In Progress Tasks", "Total Logs"],
            "value": [completed, open_tasks, len(store.list_logs())],
        }
    )


def health_trends(store: MaintenanceStore, window: int = TREND_WINDOW) -> pd.DataFrame:
    """Columns: equipment_id, name, avg_temperature_c (units without samples report 0)."""
    rows = []
    for eq in store.list_equipment():
        df = to_dataframe(store.samples(eq.id)).tail(window)
        avg = float(df["temperature"].mean()) if not df.empty else 0.0
        rows.append({"equipment_id": eq.id, "name": eq.name, "avg_temperature_c": round(avg, 1)})
    return pd.DataFrame(rows, columns=["equipment_id", "name", "avg_temperature_c"])


def build_report(store: MaintenanceStore, report_type: ReportType | str) -> pd.DataFrame:
    report_type = ReportType(report_type)
    if report_type == ReportType.EQUIPMENT_STATUS:
        return equipment_status_summary(store)
    if report_type == ReportType.MAINTENANCE_ACTIVITY:
        return maintenance_activity(store)
    return health_trends(store)
