"""
src/analytics/risk.py
─────────────────────
Predictive failure risk and next-service scheduling.

Risk ladder (latest sample, thresholds in config/risk.py):
  Low     → next service = last service + interval
  Medium  → next service = last service + interval − 1 month
  High    → next service = last service + 1 month (urgent)

Status overrides:
  Critical              → High regardless of the sample
  Warning               → at least Medium
  Maintenance / Offline → estimation suspended: risk frozen, no service date

Every function here is pure; callers own the returned state.
"""
from __future__ import annotations

import uuid
from datetime import datetime

import pandas as pd

from config.alerts import AlertSeverity
from config.risk import RISK_THRESHOLDS, RiskThresholds
from config.settings import settings
from src.data.models import (
    RISK_ORDER,
    SUSPENDED_STATUSES,
    Alert,
    Equipment,
    EquipmentHealthState,
    EquipmentStatus,
    HealthSample,
    RiskLevel,
)
from src.errors import OutOfOrderSampleError


def add_months(when: datetime, months: int) -> datetime:
    """Calendar-month arithmetic; the day is clamped to the target month's end."""
    return (pd.Timestamp(when) + pd.DateOffset(months=months)).to_pydatetime()


def classify_sample(sample: HealthSample, thresholds: RiskThresholds = RISK_THRESHOLDS) -> RiskLevel:
    """Risk implied by the sample values alone."""
    if sample.vibration > thresholds.high.vibration_mms or sample.temperature > thresholds.high.temperature_c:
        return RiskLevel.HIGH
    if sample.vibration > thresholds.medium.vibration_mms or sample.temperature > thresholds.medium.temperature_c:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def apply_status_override(risk: RiskLevel, status: EquipmentStatus) -> RiskLevel:
    if status == EquipmentStatus.CRITICAL:
        return RiskLevel.HIGH
    if status == EquipmentStatus.WARNING and RISK_ORDER[risk] < RISK_ORDER[RiskLevel.MEDIUM]:
        return RiskLevel.MEDIUM
    return risk


def next_service_date(
    sample_risk: RiskLevel,
    last_service_date: datetime,
    interval_months: int = settings.SERVICE_INTERVAL_MONTHS,
    thresholds: RiskThresholds = RISK_THRESHOLDS,
) -> datetime:
    """Recommended next service date for a sample-derived risk level."""
    if sample_risk == RiskLevel.HIGH:
        return add_months(last_service_date, thresholds.urgent_service_months)
    if sample_risk == RiskLevel.MEDIUM:
        return add_months(last_service_date, interval_months - thresholds.medium_pull_in_months)
    return add_months(last_service_date, interval_months)


def initial_state(equipment_id: str, status: EquipmentStatus = EquipmentStatus.OK) -> EquipmentHealthState:
    """State of a unit before any telemetry has been seen."""
    return EquipmentHealthState(
        equipment_id=equipment_id,
        status=status,
        predicted_risk=apply_status_override(RiskLevel.LOW, status),
    )


def _suspended(previous: EquipmentHealthState, status: EquipmentStatus) -> EquipmentHealthState:
    return previous.model_copy(update={"status": status, "next_service_date": None})


def estimate(
    previous: EquipmentHealthState,
    sample: HealthSample,
    status: EquipmentStatus,
    last_service_date: datetime,
    interval_months: int = settings.SERVICE_INTERVAL_MONTHS,
    thresholds: RiskThresholds = RISK_THRESHOLDS,
) -> EquipmentHealthState:
    """
    Fold one new sample into the health state of a unit.

    Args:
        previous: State returned by the last call (or initial_state())
        sample: Newest health sample; must not be older than previous.last_sample_at
        status: Current equipment status, treated as an override input
        last_service_date: Anchor for the next-service computation
        interval_months: Routine service interval

    Returns:
        The new EquipmentHealthState. For Maintenance/Offline units the sample
        is not consumed and the previous risk is kept.

    Raises:
        OutOfOrderSampleError: sample timestamp precedes the newest accepted one.
    """
    if status in SUSPENDED_STATUSES:
        return _suspended(previous, status)

    if previous.last_sample_at is not None and sample.timestamp < previous.last_sample_at:
        raise OutOfOrderSampleError(previous.equipment_id, sample.timestamp, previous.last_sample_at)

    sample_risk = classify_sample(sample, thresholds)
    return EquipmentHealthState(
        equipment_id=previous.equipment_id,
        status=status,
        predicted_risk=apply_status_override(sample_risk, status),
        next_service_date=next_service_date(sample_risk, last_service_date, interval_months, thresholds),
        last_sample_at=sample.timestamp,
    )


def reassess(
    previous: EquipmentHealthState,
    latest: HealthSample | None,
    status: EquipmentStatus,
    last_service_date: datetime,
    interval_months: int = settings.SERVICE_INTERVAL_MONTHS,
    thresholds: RiskThresholds = RISK_THRESHOLDS,
) -> EquipmentHealthState:
    """Recompute after a status or last-service edit, reusing the latest sample."""
    if status in SUSPENDED_STATUSES:
        return _suspended(previous, status)
    if latest is None:
        return initial_state(previous.equipment_id, status)
    return estimate(previous, latest, status, last_service_date, interval_months, thresholds)


def escalation_alert(
    previous: EquipmentHealthState,
    current: EquipmentHealthState,
    equipment: Equipment,
    sample: HealthSample,
) -> Alert | None:
    """
    One Warning alert per crossing into High risk.

    Returns None unless the risk rose to High on this step.
    """
    if current.predicted_risk != RiskLevel.HIGH or previous.predicted_risk == RiskLevel.HIGH:
        return None
    return Alert(
        id=f"alert-{uuid.uuid4().hex[:12]}",
        equipment_id=equipment.id,
        equipment_name=equipment.name,
        message=(
            f"Predicted failure risk is High: vibration {sample.vibration:.2f} mm/s, "
            f"temperature {sample.temperature:.1f}°C"
        ),
        timestamp=sample.timestamp,
        severity=AlertSeverity.WARNING,
    )
