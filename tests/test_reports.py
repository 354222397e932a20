"""
tests/test_reports.py
──────────────────────
Tests for dashboard KPIs and manager reports.
"""
import pytest

from src.analytics.reports import (
    ReportType,
    at_risk_equipment_ids,
    build_report,
    dashboard_kpis,
    equipment_status_summary,
    health_trends,
    maintenance_activity,
    risk_by_equipment,
)
from src.data.models import EquipmentStatus


class TestDashboardKpis:
    def test_counts(self, store, now):
        kpis = dashboard_kpis(store, now)
        assert kpis.equipment_count == 5
        assert kpis.error_alerts == 0      # the only Error alert is acknowledged
        assert kpis.warning_alerts == 1
        assert kpis.upcoming_tasks == 3    # task-4 is completed

    def test_at_risk_includes_critical(self, store, now):
        ids = at_risk_equipment_ids(store)
        assert "eq-3" in ids
        assert dashboard_kpis(store, now).at_risk == len(ids)

    def test_past_due_tasks_not_upcoming(self, store, now):
        later = now.replace(year=2025)
        assert dashboard_kpis(store, later).upcoming_tasks == 0


class TestEquipmentStatusSummary:
    def test_counts_per_status(self, store):
        df = equipment_status_summary(store)
        assert dict(zip(df["name"], df["value"], strict=True)) == {
            "OK": 2, "Warning": 1, "Critical": 1, "Maintenance": 1,
        }

    def test_follows_status_edits(self, store):
        eq = store.get_equipment("eq-4")
        store.update_equipment(eq.model_copy(update={"status": EquipmentStatus.OFFLINE}))
        df = equipment_status_summary(store)
        assert dict(zip(df["name"], df["value"], strict=True))["Offline"] == 1

    def test_empty_store(self, empty_store):
        assert equipment_status_summary(empty_store).empty


class TestMaintenanceActivity:
    def test_rows(self, store):
        df = maintenance_activity(store)
        assert df["name"].tolist() == ["Completed Tasks", "Pending/In Progress Tasks", "Total Logs"]
        assert df["value"].tolist() == [1, 3, 3]


class TestHealthTrends:
    def test_one_row_per_unit(self, store):
        df = health_trends(store)
        assert df["equipment_id"].tolist() == ["eq-1", "eq-2", "eq-3", "eq-4", "eq-5"]

    def test_average_over_window(self, store):
        temps = [s.temperature for s in store.samples("eq-1")][-3:]
        df = health_trends(store, window=3)
        row = df[df["equipment_id"] == "eq-1"].iloc[0]
        assert row["avg_temperature_c"] == pytest.approx(round(sum(temps) / 3, 1))

    def test_unit_without_samples_reports_zero(self, empty_store, make_equipment):
        empty_store.add_equipment(make_equipment())
        assert health_trends(empty_store)["avg_temperature_c"].tolist() == [0.0]


class TestRiskByEquipment:
    def test_one_row_per_unit(self, store):
        df = risk_by_equipment(store)
        assert df["equipment_id"].tolist() == ["eq-1", "eq-2", "eq-3", "eq-4", "eq-5"]

    def test_score_follows_predicted_risk(self, store):
        df = risk_by_equipment(store).set_index("equipment_id")
        states = store.health_states()
        for equipment_id, row in df.iterrows():
            assert row["risk"] == states[equipment_id].predicted_risk.value
        assert df.loc["eq-3", "risk"] == "High"
        assert df.loc["eq-3", "score"] == 3
        assert df.loc["eq-2", "score"] >= 2

    def test_unit_without_samples_is_low(self, empty_store, make_equipment):
        empty_store.add_equipment(make_equipment())
        df = risk_by_equipment(empty_store)
        assert df["risk"].tolist() == ["Low"]
        assert df["score"].tolist() == [1]

    def test_empty_store(self, empty_store):
        assert risk_by_equipment(empty_store).empty


class TestBuildReport:
    @pytest.mark.parametrize("report_type", list(ReportType))
    def test_every_type_builds(self, store, report_type):
        assert not build_report(store, report_type).empty

    def test_accepts_string(self, store):
        assert build_report(store, "maintenance_activity")["value"].sum() == 7

    def test_unknown_type(self, store):
        with pytest.raises(ValueError):
            build_report(store, "budget")
