"""
src/data/store.py
─────────────────
In-memory record store owned by one running app.

Provides:
  - MaintenanceStore.seeded()  : Store preloaded with demo records + history
  - record_sample() / tick()   : Telemetry ingestion + risk re-estimation
  - equipment / task / alert / log / part / user CRUD
  - delete_equipment()         : Cascading delete guarded by ReferentialCascadeError

Nothing is persisted. One instance is created in app.py and passed to every
callback module; there is no module-level store.

Thread safety: every public method takes the instance RLock.
"""
from __future__ import annotations

import logging
import threading
import uuid
from collections import deque
from datetime import UTC, datetime

import numpy as np
import pandas as pd

from config.settings import settings
from src.analytics import risk
from src.data import seed as demo
from src.data.models import (
    SUSPENDED_STATUSES,
    Alert,
    Equipment,
    EquipmentHealthState,
    EquipmentStatus,
    HealthSample,
    MaintenanceLogEntry,
    MaintenanceTask,
    SparePart,
    User,
)
from src.data.simulator import baseline_sample, generate_history, next_sample, to_dataframe
from src.errors import OutOfOrderSampleError, RecordNotFoundError, ReferentialCascadeError

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class MaintenanceStore:
    def __init__(
        self,
        interval_months: int = settings.SERVICE_INTERVAL_MONTHS,
        history_limit: int = settings.METRIC_HISTORY_LIMIT,
        seed: int = settings.SIMULATION_SEED,
    ):
        self.interval_months = interval_months
        self.history_limit = history_limit
        self._rng = np.random.default_rng(seed)
        self._lock = threading.RLock()

        self._users: dict[str, User] = {}
        self._equipment: dict[str, Equipment] = {}
        self._samples: dict[str, deque[HealthSample]] = {}
        self._states: dict[str, EquipmentHealthState] = {}
        self._tasks: dict[str, MaintenanceTask] = {}
        self._alerts: dict[str, Alert] = {}
        self._logs: dict[str, MaintenanceLogEntry] = {}
        self._parts: dict[str, SparePart] = {}

    # ── Construction ──────────────────────────────────────────────────────────

    @classmethod
    def seeded(
        cls,
        seed_value: int = settings.SIMULATION_SEED,
        days: int = settings.HISTORY_DAYS,
        end: datetime | None = None,
        **kwargs,
    ) -> MaintenanceStore:
        """Store with the demo records and `days` of simulated telemetry."""
        store = cls(seed=seed_value, **kwargs)
        for user in demo.USERS:
            store._users[user.id] = user
        for equipment in demo.EQUIPMENT:
            # Suspended units ran before their current status; backfill first
            store.add_equipment(equipment.model_copy(update={"status": EquipmentStatus.OK}))
        for task in demo.TASKS:
            store._tasks[task.id] = task
        for alert in demo.ALERTS:
            store._alerts[alert.id] = alert
        for part in demo.SPARE_PARTS:
            store._parts[part.id] = part
        for log in demo.LOGS:
            store._logs[log.id] = log

        history = generate_history(list(store._equipment), seed=seed_value, days=days, end=end)
        for equipment_id, samples in history.items():
            store.load_history(equipment_id, samples)
        for equipment in demo.EQUIPMENT:
            store.update_equipment(equipment)

        logger.info(
            "Seeded store: %d equipment, %d tasks, %d alerts, %d parts, %d logs",
            len(store._equipment), len(store._tasks), len(store._alerts),
            len(store._parts), len(store._logs),
        )
        return store

    # ── Users ─────────────────────────────────────────────────────────────────

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def get_user(self, user_id: str) -> User:
        with self._lock:
            try:
                return self._users[user_id]
            except KeyError:
                raise RecordNotFoundError("user", user_id) from None

    def add_user(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user
            return user

    # ── Equipment ─────────────────────────────────────────────────────────────

    def list_equipment(self) -> list[Equipment]:
        with self._lock:
            return list(self._equipment.values())

    def get_equipment(self, equipment_id: str) -> Equipment:
        with self._lock:
            try:
                return self._equipment[equipment_id]
            except KeyError:
                raise RecordNotFoundError("equipment", equipment_id) from None

    def add_equipment(self, equipment: Equipment) -> Equipment:
        with self._lock:
            if not equipment.id:
                equipment = equipment.model_copy(update={"id": _new_id("eq")})
            self._equipment[equipment.id] = equipment
            self._samples[equipment.id] = deque(maxlen=self.history_limit)
            self._states[equipment.id] = risk.initial_state(equipment.id, equipment.status)
            return equipment

    def update_equipment(self, equipment: Equipment) -> EquipmentHealthState:
        """
        Replace an equipment record and re-derive its health state.

        Denormalized equipment names on tasks, alerts and logs follow a rename.
        """
        with self._lock:
            previous = self.get_equipment(equipment.id)
            self._equipment[equipment.id] = equipment
            if equipment.name != previous.name:
                self._rename_references(equipment.id, equipment.name)

            samples = self._samples[equipment.id]
            state = risk.reassess(
                self._states[equipment.id],
                samples[-1] if samples else None,
                equipment.status,
                equipment.last_service_date,
                self.interval_months,
            )
            self._states[equipment.id] = state
            return state

    def save_equipment(self, equipment: Equipment) -> Equipment:
        """Insert a new unit (blank or unknown id) or replace an existing one."""
        with self._lock:
            if equipment.id and equipment.id in self._equipment:
                self.update_equipment(equipment)
                return equipment
            return self.add_equipment(equipment)

    def _rename_references(self, equipment_id: str, name: str) -> None:
        for collection in (self._tasks, self._alerts, self._logs):
            for record_id, record in collection.items():
                if record.equipment_id == equipment_id:
                    collection[record_id] = record.model_copy(update={"equipment_name": name})

    def dependents_of(self, equipment_id: str) -> dict[str, int]:
        """Count the tasks, logs and alerts that reference a unit."""
        with self._lock:
            counts = {
                "tasks": sum(t.equipment_id == equipment_id for t in self._tasks.values()),
                "logs": sum(log.equipment_id == equipment_id for log in self._logs.values()),
                "alerts": sum(a.equipment_id == equipment_id for a in self._alerts.values()),
            }
        return {kind: n for kind, n in counts.items() if n}

    def delete_equipment(self, equipment_id: str, cascade: bool = False) -> dict[str, int]:
        """
        Delete a unit together with its tasks, logs, alerts and telemetry.

        Raises ReferentialCascadeError when dependents exist and `cascade` is
        False; nothing is removed in that case. Returns the removed counts.
        """
        with self._lock:
            self.get_equipment(equipment_id)
            dependents = self.dependents_of(equipment_id)
            if dependents and not cascade:
                raise ReferentialCascadeError(equipment_id, dependents)

            del self._equipment[equipment_id]
            self._samples.pop(equipment_id, None)
            self._states.pop(equipment_id, None)
            for collection in (self._tasks, self._logs, self._alerts):
                for record_id in [k for k, r in collection.items() if r.equipment_id == equipment_id]:
                    del collection[record_id]

        if dependents:
            logger.info("Deleted %s with dependents %s", equipment_id, dependents)
        return dependents

    # ── Telemetry & health ────────────────────────────────────────────────────

    def samples(self, equipment_id: str) -> list[HealthSample]:
        with self._lock:
            self.get_equipment(equipment_id)
            return list(self._samples[equipment_id])

    def metrics_frame(self, equipment_id: str) -> pd.DataFrame:
        return to_dataframe(self.samples(equipment_id))

    def health_state(self, equipment_id: str) -> EquipmentHealthState:
        with self._lock:
            self.get_equipment(equipment_id)
            return self._states[equipment_id]

    def health_states(self) -> dict[str, EquipmentHealthState]:
        with self._lock:
            return dict(self._states)

    def load_history(self, equipment_id: str, samples: list[HealthSample]) -> EquipmentHealthState:
        """Feed a chronological batch through the estimator (history seeding)."""
        state = self.health_state(equipment_id)
        for sample in samples:
            state = self.record_sample(equipment_id, sample, raise_alerts=False)
        return state

    def record_sample(
        self,
        equipment_id: str,
        sample: HealthSample,
        raise_alerts: bool = True,
    ) -> EquipmentHealthState:
        """
        Append one sample and re-estimate.

        Out-of-order samples are logged and dropped; samples for suspended
        units (Maintenance/Offline) are ignored. Either way the previous state
        is returned unchanged.
        """
        with self._lock:
            equipment = self.get_equipment(equipment_id)
            previous = self._states[equipment_id]
            if equipment.status in SUSPENDED_STATUSES:
                return previous
            try:
                state = risk.estimate(
                    previous,
                    sample,
                    equipment.status,
                    equipment.last_service_date,
                    self.interval_months,
                )
            except OutOfOrderSampleError as exc:
                logger.warning("Dropped sample: %s", exc)
                return previous

            self._samples[equipment_id].append(sample)
            self._states[equipment_id] = state

            if raise_alerts:
                alert = risk.escalation_alert(previous, state, equipment, sample)
                if alert is not None:
                    self._alerts[alert.id] = alert
                    logger.info("%s escalated to %s risk", equipment_id, state.predicted_risk.value)
            return state

    def tick(self, now: datetime | None = None) -> dict[str, EquipmentHealthState]:
        """
        One telemetry interval: a new sample for every active unit.

        Returns the updated states of the units that received a sample.
        """
        now = now or datetime.now(tz=UTC)
        updated: dict[str, EquipmentHealthState] = {}
        with self._lock:
            for equipment_id, equipment in list(self._equipment.items()):
                if equipment.status in SUSPENDED_STATUSES:
                    continue
                history = self._samples[equipment_id]
                if history:
                    sample = next_sample(history[-1], self._rng, now)
                else:
                    sample = baseline_sample(self._rng, now)
                updated[equipment_id] = self.record_sample(equipment_id, sample)
        return updated

    # ── Tasks ─────────────────────────────────────────────────────────────────

    def list_tasks(self) -> list[MaintenanceTask]:
        with self._lock:
            return list(self._tasks.values())

    def get_task(self, task_id: str) -> MaintenanceTask:
        with self._lock:
            try:
                return self._tasks[task_id]
            except KeyError:
                raise RecordNotFoundError("task", task_id) from None

    def save_task(self, task: MaintenanceTask) -> MaintenanceTask:
        """Insert or replace a task; the equipment name is taken from the unit."""
        with self._lock:
            equipment = self.get_equipment(task.equipment_id)
            task = task.model_copy(
                update={"id": task.id or _new_id("task"), "equipment_name": equipment.name}
            )
            self._tasks[task.id] = task
            return task

    def delete_task(self, task_id: str) -> None:
        with self._lock:
            self.get_task(task_id)
            del self._tasks[task_id]

    # ── Alerts ────────────────────────────────────────────────────────────────

    def list_alerts(self) -> list[Alert]:
        with self._lock:
            return list(self._alerts.values())

    def add_alert(self, alert: Alert) -> Alert:
        with self._lock:
            self._alerts[alert.id] = alert
            return alert

    def acknowledge_alert(self, alert_id: str) -> Alert:
        with self._lock:
            try:
                alert = self._alerts[alert_id]
            except KeyError:
                raise RecordNotFoundError("alert", alert_id) from None
            alert = alert.model_copy(update={"acknowledged": True})
            self._alerts[alert_id] = alert
            return alert

    def acknowledge_all(self, alert_ids: list[str] | None = None) -> int:
        """Acknowledge every alert (or just `alert_ids`); returns how many changed."""
        with self._lock:
            targets = self._alerts.keys() if alert_ids is None else alert_ids
            changed = 0
            for alert_id in list(targets):
                alert = self._alerts.get(alert_id)
                if alert is not None and not alert.acknowledged:
                    self._alerts[alert_id] = alert.model_copy(update={"acknowledged": True})
                    changed += 1
            return changed

    def active_alert_count(self, equipment_id: str | None = None) -> int:
        """Count unacknowledged alerts."""
        with self._lock:
            return sum(
                not a.acknowledged and (equipment_id is None or a.equipment_id == equipment_id)
                for a in self._alerts.values()
            )

    # ── Logs ──────────────────────────────────────────────────────────────────

    def list_logs(self) -> list[MaintenanceLogEntry]:
        with self._lock:
            return list(self._logs.values())

    def add_log(self, entry: MaintenanceLogEntry) -> MaintenanceLogEntry:
        """Record a log entry; part names are resolved from the inventory."""
        with self._lock:
            equipment = self.get_equipment(entry.equipment_id)
            parts_used = [
                usage.model_copy(update={"part_name": self.get_part(usage.part_id).name})
                for usage in entry.parts_used
            ]
            entry = entry.model_copy(
                update={
                    "id": entry.id or _new_id("log"),
                    "equipment_name": equipment.name,
                    "parts_used": parts_used,
                }
            )
            self._logs[entry.id] = entry
            return entry

    def delete_log(self, log_id: str) -> None:
        with self._lock:
            if log_id not in self._logs:
                raise RecordNotFoundError("log", log_id)
            del self._logs[log_id]

    # ── Spare parts ───────────────────────────────────────────────────────────

    def list_parts(self) -> list[SparePart]:
        with self._lock:
            return list(self._parts.values())

    def get_part(self, part_id: str) -> SparePart:
        with self._lock:
            try:
                return self._parts[part_id]
            except KeyError:
                raise RecordNotFoundError("part", part_id) from None

    def save_part(self, part: SparePart) -> SparePart:
        with self._lock:
            if not part.id:
                part = part.model_copy(update={"id": _new_id("part")})
            self._parts[part.id] = part
            return part

    def delete_part(self, part_id: str) -> None:
        # Log entries keep their own copy of the part name, so no cascade.
        with self._lock:
            self.get_part(part_id)
            del self._parts[part_id]
