"""
src/analytics/views.py
──────────────────────
Query definitions for the five list views.

  EQUIPMENT_VIEW  name/location search · status, type        · insertion order
  TASK_VIEW       description/equipment · status, priority…  · due date ↑
  ALERT_VIEW      message/equipment     · severity, ack       · timestamp ↓
  LOG_VIEW        description/equipment · equipment, tech     · date ↓
  INVENTORY_VIEW  name/sku/supplier     · stock level         · name ↑
"""
from __future__ import annotations

from enum import Enum

from config.alerts import SEVERITY_RANK
from src.analytics.query import RecordView, SortDirection
from src.data.models import Alert, Equipment, MaintenanceLogEntry, MaintenanceTask, SparePart
from src.errors import InvalidFilterError


class StockLevel(str, Enum):
    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


class AckState(str, Enum):
    ACKNOWLEDGED = "ACKNOWLEDGED"
    UNACKNOWLEDGED = "UNACKNOWLEDGED"


def _coerce(enum_cls: type[Enum], field: str, value):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidFilterError(field, [m.value for m in enum_cls], value) from None


def stock_level_matches(part: SparePart, level: StockLevel | str) -> bool:
    qty = part.quantity_in_stock
    level = _coerce(StockLevel, "stock", level)
    if level == StockLevel.IN_STOCK:
        return qty > 0
    if level == StockLevel.LOW_STOCK:
        return 0 < qty <= part.reorder_level
    return qty == 0


def stock_level(part: SparePart) -> StockLevel:
    """Most specific level for display; LOW_STOCK parts also match IN_STOCK."""
    if part.quantity_in_stock == 0:
        return StockLevel.OUT_OF_STOCK
    if part.quantity_in_stock <= part.reorder_level:
        return StockLevel.LOW_STOCK
    return StockLevel.IN_STOCK


def ack_state_matches(alert: Alert, state: AckState | str) -> bool:
    return alert.acknowledged == (_coerce(AckState, "acknowledged", state) == AckState.ACKNOWLEDGED)


def _equals(attr: str):
    # Enum members compare equal to their str values, so UI strings work too.
    return lambda record, value: getattr(record, attr) == value


EQUIPMENT_VIEW: RecordView[Equipment] = RecordView(
    name="equipment",
    text_fields=(lambda e: e.name, lambda e: e.location),
    matchers={
        "status": _equals("status"),
        "type": _equals("type"),
    },
    sort_keys={
        "name": lambda e: e.name.lower(),
        "status": lambda e: e.status.value,
        "location": lambda e: e.location.lower(),
        "last_service_date": lambda e: e.last_service_date,
    },
)

TASK_VIEW: RecordView[MaintenanceTask] = RecordView(
    name="tasks",
    text_fields=(lambda t: t.description, lambda t: t.equipment_name),
    matchers={
        "status": _equals("status"),
        "priority": _equals("priority"),
        "assigned_to": _equals("assigned_to"),
        "equipment_id": _equals("equipment_id"),
    },
    sort_keys={
        "due_date": lambda t: t.due_date,
        "created_at": lambda t: t.created_at,
        "equipment_name": lambda t: t.equipment_name.lower(),
    },
    default_sort_key="due_date",
    default_direction=SortDirection.ASC,
)

ALERT_VIEW: RecordView[Alert] = RecordView(
    name="alerts",
    text_fields=(lambda a: a.message, lambda a: a.equipment_name),
    matchers={
        "severity": _equals("severity"),
        "acknowledged": ack_state_matches,
        "equipment_id": _equals("equipment_id"),
    },
    sort_keys={
        "timestamp": lambda a: a.timestamp,
        "severity": lambda a: SEVERITY_RANK[a.severity],
        "equipment_name": lambda a: a.equipment_name.lower(),
    },
    default_sort_key="timestamp",
    default_direction=SortDirection.DESC,
)

LOG_VIEW: RecordView[MaintenanceLogEntry] = RecordView(
    name="logs",
    text_fields=(lambda log: log.description, lambda log: log.equipment_name),
    matchers={
        "equipment_id": _equals("equipment_id"),
        "performed_by": _equals("performed_by"),
    },
    sort_keys={
        "date": lambda log: log.date,
        "duration_hours": lambda log: log.duration_hours,
    },
    default_sort_key="date",
    default_direction=SortDirection.DESC,
)

INVENTORY_VIEW: RecordView[SparePart] = RecordView(
    name="inventory",
    text_fields=(lambda p: p.name, lambda p: p.sku, lambda p: p.supplier),
    matchers={"stock": stock_level_matches},
    sort_keys={
        "name": lambda p: p.name.lower(),
        "quantity_in_stock": lambda p: p.quantity_in_stock,
        "price": lambda p: p.price,
    },
    default_sort_key="name",
    default_direction=SortDirection.ASC,
)
