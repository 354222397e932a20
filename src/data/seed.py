"""
src/data/seed.py
────────────────
Demo records loaded into a fresh MaintenanceStore.

Five office/facility units, four users (one per role plus a second
technician), and a handful of tasks, alerts, parts and log entries that
reference them.
"""
from __future__ import annotations

from datetime import datetime

from config.alerts import AlertSeverity
from config.roles import UserRole
from src.data.models import (
    Alert,
    Equipment,
    EquipmentStatus,
    MaintenanceLogEntry,
    MaintenanceTask,
    PartUsage,
    SparePart,
    TaskPriority,
    TaskStatus,
    User,
)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


USERS: list[User] = [
    User(id="user-1", name="Alice Smith", role=UserRole.MANAGER, email="alice@example.com"),
    User(id="user-2", name="Bob Johnson", role=UserRole.SUPERVISOR, email="bob@example.com"),
    User(id="user-3", name="Charlie Brown", role=UserRole.TECHNICIAN, email="charlie@example.com"),
    User(id="user-4", name="Diana Prince", role=UserRole.TECHNICIAN, email="diana@example.com"),
]

EQUIPMENT: list[Equipment] = [
    Equipment(
        id="eq-1", name="Office Printer X1000", type="Printer", location="Floor 1, Copy Room",
        status=EquipmentStatus.OK, last_service_date=_ts("2024-05-15T00:00:00Z"),
        purchase_date=_ts("2023-01-10T00:00:00Z"), assigned_technician_id="user-3",
    ),
    Equipment(
        id="eq-2", name="Conference Room AC Unit", type="HVAC", location="Floor 2, Meeting Room A",
        status=EquipmentStatus.WARNING, last_service_date=_ts("2024-04-20T00:00:00Z"),
        purchase_date=_ts("2022-07-01T00:00:00Z"), assigned_technician_id="user-4",
    ),
    Equipment(
        id="eq-3", name="CEO Office Projector", type="Projector", location="Floor 3, CEO Office",
        status=EquipmentStatus.CRITICAL, last_service_date=_ts("2024-03-10T00:00:00Z"),
        purchase_date=_ts("2023-05-20T00:00:00Z"), notes="Flickering image reported",
    ),
    Equipment(
        id="eq-4", name="Kitchen Refrigerator", type="Appliance", location="Floor 1, Break Room",
        status=EquipmentStatus.OK, last_service_date=_ts("2024-06-01T00:00:00Z"),
        purchase_date=_ts("2023-02-15T00:00:00Z"),
    ),
    Equipment(
        id="eq-5", name="Server Rack Fan Array", type="IT Hardware", location="Data Center, Rack 3",
        status=EquipmentStatus.MAINTENANCE, last_service_date=_ts("2024-07-10T00:00:00Z"),
        purchase_date=_ts("2022-11-05T00:00:00Z"), assigned_technician_id="user-3",
    ),
]

TASKS: list[MaintenanceTask] = [
    MaintenanceTask(
        id="task-1", equipment_id="eq-2", equipment_name="Conference Room AC Unit",
        description="Annual AC service and filter change", assigned_to="Diana Prince",
        due_date=_ts("2024-07-25T00:00:00Z"), status=TaskStatus.PENDING,
        priority=TaskPriority.MEDIUM, created_at=_ts("2024-07-01T00:00:00Z"),
    ),
    MaintenanceTask(
        id="task-2", equipment_id="eq-3", equipment_name="CEO Office Projector",
        description="Investigate flickering image issue", assigned_to="Charlie Brown",
        due_date=_ts("2024-07-22T00:00:00Z"), status=TaskStatus.IN_PROGRESS,
        priority=TaskPriority.HIGH, created_at=_ts("2024-07-10T00:00:00Z"),
    ),
    MaintenanceTask(
        id="task-3", equipment_id="eq-1", equipment_name="Office Printer X1000",
        description="Replace toner cartridge (Black)", assigned_to="Charlie Brown",
        due_date=_ts("2024-07-30T00:00:00Z"), status=TaskStatus.PENDING,
        priority=TaskPriority.LOW, created_at=_ts("2024-07-15T00:00:00Z"),
    ),
    MaintenanceTask(
        id="task-4", equipment_id="eq-5", equipment_name="Server Rack Fan Array",
        description="Complete fan replacement", assigned_to="Charlie Brown",
        due_date=_ts("2024-07-15T00:00:00Z"), status=TaskStatus.COMPLETED,
        priority=TaskPriority.HIGH, created_at=_ts("2024-07-10T00:00:00Z"),
    ),
]

ALERTS: list[Alert] = [
    Alert(
        id="alert-1", equipment_id="eq-2", equipment_name="Conference Room AC Unit",
        message="High temperature detected: 32°C", timestamp=_ts("2024-07-20T10:30:00Z"),
        severity=AlertSeverity.WARNING,
    ),
    Alert(
        id="alert-2", equipment_id="eq-3", equipment_name="CEO Office Projector",
        message="Equipment offline unexpectedly", timestamp=_ts("2024-07-19T15:00:00Z"),
        severity=AlertSeverity.ERROR, acknowledged=True,
    ),
    Alert(
        id="alert-3", equipment_id="eq-1", equipment_name="Office Printer X1000",
        message="Low toner warning", timestamp=_ts("2024-07-21T09:00:00Z"),
        severity=AlertSeverity.INFO,
    ),
]

SPARE_PARTS: list[SparePart] = [
    SparePart(
        id="part-1", name="Printer Toner Cartridge - Black X1000", sku="TN-X1000-BLK",
        quantity_in_stock=15, reorder_level=5, supplier="PrintSupply Co.", price=75.99, location="Shelf B-3",
    ),
    SparePart(
        id="part-2", name="AC Filter Medium Size", sku="ACF-M-2024",
        quantity_in_stock=30, reorder_level=10, supplier="HVAC Parts Inc.", price=12.50, location="Shelf C-1",
    ),
    SparePart(
        id="part-3", name="Projector Lamp PL-500", sku="LP-PL500",
        quantity_in_stock=5, reorder_level=2, supplier="AVWorld", price=120.00, location="Shelf A-5",
    ),
    SparePart(
        id="part-4", name="Server Fan 120mm", sku="SF-120MM-HQ",
        quantity_in_stock=22, reorder_level=10, supplier="ITCooling Solutions", price=25.00, location="Shelf D-7",
    ),
]

LOGS: list[MaintenanceLogEntry] = [
    MaintenanceLogEntry(
        id="log-1", equipment_id="eq-1", equipment_name="Office Printer X1000",
        date=_ts("2024-05-15T00:00:00Z"), performed_by="Charlie Brown",
        description="Routine maintenance, cleaned rollers, checked connections.", duration_hours=1,
    ),
    MaintenanceLogEntry(
        id="log-2", equipment_id="eq-2", equipment_name="Conference Room AC Unit",
        date=_ts("2024-04-20T00:00:00Z"), performed_by="Diana Prince",
        description="Cleaned coils and replaced air filter.",
        parts_used=[PartUsage(part_id="part-2", part_name="AC Filter Medium Size", quantity=1)],
        duration_hours=2.5,
    ),
    MaintenanceLogEntry(
        id="log-3", equipment_id="eq-5", equipment_name="Server Rack Fan Array", task_id="task-4",
        date=_ts("2024-07-15T00:00:00Z"), performed_by="Charlie Brown",
        description="Replaced all fans in array as per task-4. Tested airflow.",
        parts_used=[PartUsage(part_id="part-4", part_name="Server Fan 120mm", quantity=8)],
        duration_hours=4,
    ),
]
