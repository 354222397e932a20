"""
tests/test_store.py
────────────────────
Tests for the in-memory record store: telemetry ingestion, CRUD and
referential cascade.
"""
from datetime import datetime, timedelta, timezone

import pytest

from src.data.models import (
    EquipmentStatus,
    MaintenanceLogEntry,
    MaintenanceTask,
    PartUsage,
    RiskLevel,
    SparePart,
)
from src.errors import RecordNotFoundError, ReferentialCascadeError


class TestSeededStore:
    def test_demo_records_loaded(self, store):
        assert len(store.list_equipment()) == 5
        assert len(store.list_users()) == 4
        assert len(store.list_tasks()) == 4
        assert len(store.list_alerts()) == 3
        assert len(store.list_parts()) == 4
        assert len(store.list_logs()) == 3

    def test_history_loaded_for_every_unit(self, store):
        for eq in store.list_equipment():
            assert len(store.samples(eq.id)) == 7

    def test_status_overrides_applied(self, store):
        assert store.health_state("eq-3").predicted_risk == RiskLevel.HIGH
        assert store.health_state("eq-2").predicted_risk in (RiskLevel.MEDIUM, RiskLevel.HIGH)

    def test_suspended_unit_has_no_service_date(self, store):
        state = store.health_state("eq-5")
        assert state.status == EquipmentStatus.MAINTENANCE
        assert state.next_service_date is None

    def test_active_units_have_service_date(self, store):
        assert store.health_state("eq-1").next_service_date is not None

    def test_seeding_is_reproducible(self, store, now):
        from src.data.store import MaintenanceStore

        other = MaintenanceStore.seeded(seed_value=42, days=7, end=now)
        assert other.samples("eq-1") == store.samples("eq-1")


class TestTelemetry:
    def test_record_sample_updates_state(self, empty_store, make_equipment, make_sample):
        empty_store.add_equipment(make_equipment())
        state = empty_store.record_sample("eq-test", make_sample(vibration=0.45))
        assert state.predicted_risk == RiskLevel.MEDIUM
        assert state.next_service_date == datetime(2024, 6, 1, tzinfo=timezone.utc)
        assert empty_store.health_state("eq-test") == state

    def test_history_is_bounded(self, empty_store, make_equipment, make_sample, now):
        empty_store.add_equipment(make_equipment())
        for i in range(60):
            empty_store.record_sample("eq-test", make_sample(timestamp=now + timedelta(minutes=i)))
        samples = empty_store.samples("eq-test")
        assert len(samples) == 50
        assert samples[0].timestamp == now + timedelta(minutes=10)
        assert samples[-1].timestamp == now + timedelta(minutes=59)

    def test_out_of_order_sample_dropped(self, empty_store, make_equipment, make_sample, now):
        empty_store.add_equipment(make_equipment())
        first = empty_store.record_sample("eq-test", make_sample())
        state = empty_store.record_sample("eq-test", make_sample(vibration=0.9, timestamp=now - timedelta(hours=1)))
        assert state == first
        assert len(empty_store.samples("eq-test")) == 1

    def test_naive_timestamps_compare_as_utc(self, empty_store, make_equipment, make_sample):
        empty_store.add_equipment(make_equipment())
        first = empty_store.record_sample("eq-test", make_sample())
        assert empty_store.record_sample("eq-test", make_sample(timestamp=datetime(2024, 6, 1, 11, 0))) == first
        state = empty_store.record_sample("eq-test", make_sample(timestamp=datetime(2024, 6, 1, 13, 0)))
        assert state.last_sample_at == datetime(2024, 6, 1, 13, 0, tzinfo=timezone.utc)
        assert len(empty_store.samples("eq-test")) == 2

    def test_suspended_unit_ignores_samples(self, empty_store, make_equipment, make_sample):
        empty_store.add_equipment(make_equipment(status=EquipmentStatus.OFFLINE))
        empty_store.record_sample("eq-test", make_sample(vibration=0.9))
        assert empty_store.samples("eq-test") == []
        assert empty_store.health_state("eq-test").next_service_date is None

    def test_escalation_raises_one_alert(self, empty_store, make_equipment, make_sample, now):
        empty_store.add_equipment(make_equipment())
        empty_store.record_sample("eq-test", make_sample())
        empty_store.record_sample("eq-test", make_sample(vibration=0.7, timestamp=now + timedelta(minutes=1)))
        empty_store.record_sample("eq-test", make_sample(vibration=0.8, timestamp=now + timedelta(minutes=2)))
        alerts = empty_store.list_alerts()
        assert len(alerts) == 1
        assert alerts[0].equipment_id == "eq-test"
        assert empty_store.active_alert_count("eq-test") == 1

    def test_load_history_raises_no_alerts(self, empty_store, make_equipment, make_sample, now):
        empty_store.add_equipment(make_equipment())
        empty_store.load_history("eq-test", [make_sample(vibration=0.9)])
        assert empty_store.list_alerts() == []
        assert empty_store.health_state("eq-test").predicted_risk == RiskLevel.HIGH

    def test_tick_samples_active_units_only(self, store, now):
        updated = store.tick(now + timedelta(hours=1))
        assert set(updated) == {"eq-1", "eq-2", "eq-3", "eq-4"}
        assert len(store.samples("eq-1")) == 8
        assert len(store.samples("eq-5")) == 7
        assert store.health_state("eq-1").last_sample_at == now + timedelta(hours=1)

    def test_tick_on_unit_without_history(self, empty_store, make_equipment, now):
        empty_store.add_equipment(make_equipment())
        empty_store.tick(now)
        assert len(empty_store.samples("eq-test")) == 1

    def test_metrics_frame(self, store):
        df = store.metrics_frame("eq-1")
        assert len(df) == 7
        assert {"timestamp", "vibration", "temperature", "usage_hours", "energy_consumption"} <= set(df.columns)


class TestEquipmentEdits:
    def test_status_edit_reassesses(self, store):
        eq = store.get_equipment("eq-1")
        state = store.update_equipment(eq.model_copy(update={"status": EquipmentStatus.CRITICAL}))
        assert state.predicted_risk == RiskLevel.HIGH
        assert store.health_state("eq-1") == state

    def test_suspend_then_resume(self, store):
        eq = store.get_equipment("eq-1")
        suspended = store.update_equipment(eq.model_copy(update={"status": EquipmentStatus.OFFLINE}))
        assert suspended.next_service_date is None
        resumed = store.update_equipment(eq)
        assert resumed.next_service_date is not None

    def test_last_service_edit_moves_schedule(self, store):
        eq = store.get_equipment("eq-1")
        before = store.health_state("eq-1").next_service_date
        later = eq.last_service_date + timedelta(days=31)
        after = store.update_equipment(eq.model_copy(update={"last_service_date": later})).next_service_date
        assert after > before

    def test_rename_updates_references(self, store):
        eq = store.get_equipment("eq-2")
        store.update_equipment(eq.model_copy(update={"name": "Meeting Room AC"}))
        assert store.get_task("task-1").equipment_name == "Meeting Room AC"
        assert {a.equipment_name for a in store.list_alerts() if a.equipment_id == "eq-2"} == {"Meeting Room AC"}
        assert {log.equipment_name for log in store.list_logs() if log.equipment_id == "eq-2"} == {"Meeting Room AC"}

    def test_update_unknown_equipment(self, store, make_equipment):
        with pytest.raises(RecordNotFoundError):
            store.update_equipment(make_equipment(equipment_id="eq-missing"))

    def test_add_assigns_id(self, empty_store, make_equipment):
        eq = empty_store.add_equipment(make_equipment(equipment_id=""))
        assert eq.id.startswith("eq-")
        assert empty_store.get_equipment(eq.id) == eq

    def test_save_new_equipment(self, store, make_equipment):
        eq = store.save_equipment(make_equipment(equipment_id="", name="Loading Dock Heater"))
        assert eq.id.startswith("eq-")
        assert store.list_equipment()[-1] == eq
        assert store.health_state(eq.id).predicted_risk == RiskLevel.LOW

    def test_save_existing_equipment_edits_in_place(self, store):
        eq = store.get_equipment("eq-2")
        count = len(store.list_equipment())
        edited = eq.model_copy(update={"name": "Meeting Room AC", "location": "Floor 3", "status": EquipmentStatus.CRITICAL})
        assert store.save_equipment(edited) == edited
        assert len(store.list_equipment()) == count
        assert store.get_equipment("eq-2").location == "Floor 3"
        assert store.get_task("task-1").equipment_name == "Meeting Room AC"
        assert store.health_state("eq-2").predicted_risk == RiskLevel.HIGH


class TestCascadeDelete:
    def test_dependents_counted(self, store):
        assert store.dependents_of("eq-2") == {"tasks": 1, "logs": 1, "alerts": 1}

    def test_delete_with_dependents_requires_confirmation(self, store):
        with pytest.raises(ReferentialCascadeError) as exc_info:
            store.delete_equipment("eq-2")
        assert exc_info.value.record_id == "eq-2"
        assert exc_info.value.dependents == {"tasks": 1, "logs": 1, "alerts": 1}
        # Nothing removed
        assert store.get_equipment("eq-2")
        assert len(store.list_tasks()) == 4

    def test_cascade_removes_dependents(self, store):
        removed = store.delete_equipment("eq-2", cascade=True)
        assert removed == {"tasks": 1, "logs": 1, "alerts": 1}
        assert all(t.equipment_id != "eq-2" for t in store.list_tasks())
        assert all(log.equipment_id != "eq-2" for log in store.list_logs())
        assert all(a.equipment_id != "eq-2" for a in store.list_alerts())
        assert "eq-2" not in store.health_states()
        with pytest.raises(RecordNotFoundError):
            store.samples("eq-2")

    def test_delete_without_dependents(self, store):
        assert store.delete_equipment("eq-4") == {}
        assert len(store.list_equipment()) == 4

    def test_delete_unknown(self, store):
        with pytest.raises(RecordNotFoundError):
            store.delete_equipment("eq-missing")


class TestRecords:
    def test_save_new_task(self, store, now):
        task = store.save_task(
            MaintenanceTask(
                id="", equipment_id="eq-4", equipment_name="", description="Defrost freezer",
                assigned_to="Charlie Brown", due_date=now, created_at=now,
            )
        )
        assert task.id.startswith("task-")
        assert task.equipment_name == "Kitchen Refrigerator"
        assert store.list_tasks()[-1] == task

    def test_save_task_for_unknown_equipment(self, store, now):
        with pytest.raises(RecordNotFoundError):
            store.save_task(
                MaintenanceTask(
                    id="", equipment_id="eq-missing", equipment_name="", description="x",
                    assigned_to="Charlie Brown", due_date=now, created_at=now,
                )
            )

    def test_edit_task_in_place(self, store):
        task = store.get_task("task-3")
        store.save_task(task.model_copy(update={"description": "Replace toner (all colours)"}))
        assert store.get_task("task-3").description == "Replace toner (all colours)"
        assert len(store.list_tasks()) == 4

    def test_delete_task(self, store):
        store.delete_task("task-3")
        with pytest.raises(RecordNotFoundError):
            store.get_task("task-3")

    def test_acknowledge(self, store):
        assert store.acknowledge_alert("alert-1").acknowledged
        assert store.active_alert_count() == 1

    def test_acknowledge_all_counts_changes(self, store):
        assert store.acknowledge_all() == 2
        assert store.acknowledge_all() == 0
        assert store.active_alert_count() == 0

    def test_acknowledge_unknown(self, store):
        with pytest.raises(RecordNotFoundError):
            store.acknowledge_alert("alert-missing")

    def test_add_log_resolves_names(self, store, now):
        entry = store.add_log(
            MaintenanceLogEntry(
                id="", equipment_id="eq-3", equipment_name="", date=now, performed_by="Charlie Brown",
                description="Replaced lamp", parts_used=[PartUsage(part_id="part-3", part_name="", quantity=1)],
                duration_hours=0.5,
            )
        )
        assert entry.equipment_name == "CEO Office Projector"
        assert entry.parts_used[0].part_name == "Projector Lamp PL-500"

    def test_add_log_unknown_part(self, store, now):
        with pytest.raises(RecordNotFoundError):
            store.add_log(
                MaintenanceLogEntry(
                    id="", equipment_id="eq-3", equipment_name="", date=now, performed_by="Charlie Brown",
                    description="x", parts_used=[PartUsage(part_id="part-missing", part_name="", quantity=1)],
                )
            )

    def test_delete_part_keeps_log_part_names(self, store):
        store.delete_part("part-2")
        log = next(log for log in store.list_logs() if log.id == "log-2")
        assert log.parts_used[0].part_name == "AC Filter Medium Size"

    def test_save_part(self, store):
        part = store.save_part(SparePart(id="", name="HVAC Belt", sku="BELT-1", quantity_in_stock=2, reorder_level=1))
        assert store.get_part(part.id) == part

    def test_unknown_user(self, store):
        with pytest.raises(KeyError):
            store.get_user("user-missing")
