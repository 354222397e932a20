"""
config/alerts.py
────────────────
Alert severities as shown in the alert list, with their display colours and
ranking (used by the alert view's "severity" sort).
"""

from enum import Enum


class AlertSeverity(str, Enum):
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"


SEVERITY_COLORS: dict[str, str] = {
    AlertSeverity.INFO: "#58a6ff",
    AlertSeverity.WARNING: "#e8a020",
    AlertSeverity.ERROR: "#da3633",
}

# Higher = more severe
SEVERITY_RANK: dict[str, int] = {
    AlertSeverity.INFO: 1,
    AlertSeverity.WARNING: 2,
    AlertSeverity.ERROR: 3,
}
