"""
src/data/models.py
──────────────────
Pydantic v2 data models for equipment, telemetry, tasks, alerts, logs,
spare parts and users.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from config.alerts import AlertSeverity
from config.roles import UserRole


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# Every timestamp in the store is UTC-aware, so samples stay comparable
UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class EquipmentStatus(str, Enum):
    OK = "OK"
    WARNING = "Warning"
    CRITICAL = "Critical"
    MAINTENANCE = "Maintenance"
    OFFLINE = "Offline"


# Statuses that suspend telemetry and risk estimation
SUSPENDED_STATUSES = frozenset({EquipmentStatus.MAINTENANCE, EquipmentStatus.OFFLINE})


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


RISK_ORDER: dict[RiskLevel, int] = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class HealthSample(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    timestamp: UtcDatetime
    vibration: float = Field(ge=0.0)          # mm/s
    temperature: float                        # °C
    usage_hours: float = Field(ge=0.0)        # cumulative
    energy_consumption: float = Field(ge=0.0)  # kWh per interval


class EquipmentHealthState(BaseModel):
    model_config = ConfigDict(frozen=True)

    equipment_id: str
    status: EquipmentStatus
    predicted_risk: RiskLevel = RiskLevel.LOW
    next_service_date: UtcDatetime | None = None
    last_sample_at: UtcDatetime | None = None


class Equipment(BaseModel):
    id: str
    name: str = Field(min_length=1)
    type: str
    location: str
    status: EquipmentStatus = EquipmentStatus.OK
    last_service_date: UtcDatetime
    purchase_date: UtcDatetime
    notes: str | None = None
    assigned_technician_id: str | None = None


class MaintenanceTask(BaseModel):
    id: str
    equipment_id: str
    equipment_name: str
    description: str = Field(min_length=1)
    assigned_to: str
    due_date: UtcDatetime
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    notes: str | None = None
    created_at: UtcDatetime


class Alert(BaseModel):
    id: str
    equipment_id: str
    equipment_name: str
    message: str
    timestamp: UtcDatetime
    severity: AlertSeverity
    acknowledged: bool = False


class PartUsage(BaseModel):
    part_id: str
    part_name: str
    quantity: int = Field(ge=1)


class MaintenanceLogEntry(BaseModel):
    id: str
    equipment_id: str
    equipment_name: str
    task_id: str | None = None
    date: UtcDatetime
    performed_by: str
    description: str = Field(min_length=1)
    parts_used: list[PartUsage] = Field(default_factory=list)
    duration_hours: float = Field(default=0.0, ge=0.0)


class SparePart(BaseModel):
    id: str
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    quantity_in_stock: int = Field(default=0, ge=0)
    reorder_level: int = Field(default=0, ge=0)
    supplier: str = ""
    price: float = Field(default=0.0, ge=0.0)  # per unit
    location: str | None = None


class User(BaseModel):
    id: str
    name: str
    role: UserRole
    email: str
