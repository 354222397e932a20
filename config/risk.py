"""
config/risk.py
──────────────
Predictive-risk policy constants.

Sample thresholds (strictly greater-than):
  Medium: vibration > 0.4 mm/s  or temperature > 28.0 °C  → service 1 month earlier
  High:   vibration > 0.5 mm/s  or temperature > 29.5 °C  → service 1 month after last
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class RiskBand:
    vibration_mms: float
    temperature_c: float


@dataclass(frozen=True)
class RiskThresholds:
    medium: RiskBand
    high: RiskBand
    medium_pull_in_months: int = 1   # Medium risk: next service this much earlier
    urgent_service_months: int = 1   # High risk: months after last service


RISK_THRESHOLDS = RiskThresholds(
    medium=RiskBand(vibration_mms=0.4, temperature_c=28.0),
    high=RiskBand(vibration_mms=0.5, temperature_c=29.5),
)
