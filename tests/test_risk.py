"""
tests/test_risk.py
───────────────────
Tests for predictive risk estimation and next-service scheduling.
"""
from datetime import datetime, timedelta, timezone

import pytest

from src.analytics.risk import (
    add_months,
    apply_status_override,
    classify_sample,
    escalation_alert,
    estimate,
    initial_state,
    next_service_date,
    reassess,
)
from src.data.models import RISK_ORDER, EquipmentStatus, RiskLevel
from src.errors import OutOfOrderSampleError

JAN_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _estimate(sample, status=EquipmentStatus.OK, previous=None):
    previous = previous or initial_state("eq-test", status)
    return estimate(previous, sample, status, JAN_1, interval_months=6)


class TestAddMonths:
    def test_plain_month_step(self):
        assert add_months(JAN_1, 6) == datetime(2024, 7, 1, tzinfo=timezone.utc)

    def test_clamps_to_month_end(self):
        jan_31 = datetime(2024, 1, 31, tzinfo=timezone.utc)
        assert add_months(jan_31, 1) == datetime(2024, 2, 29, tzinfo=timezone.utc)

    def test_crosses_year(self):
        assert add_months(datetime(2024, 11, 15, tzinfo=timezone.utc), 3) == datetime(2025, 2, 15, tzinfo=timezone.utc)


class TestClassifySample:
    def test_low(self, make_sample):
        assert classify_sample(make_sample(vibration=0.3, temperature=25.0)) == RiskLevel.LOW

    def test_medium_by_vibration(self, make_sample):
        assert classify_sample(make_sample(vibration=0.45, temperature=25.0)) == RiskLevel.MEDIUM

    def test_medium_by_temperature(self, make_sample):
        assert classify_sample(make_sample(vibration=0.1, temperature=29.0)) == RiskLevel.MEDIUM

    def test_high_by_vibration(self, make_sample):
        assert classify_sample(make_sample(vibration=0.55, temperature=20.0)) == RiskLevel.HIGH

    def test_high_by_temperature(self, make_sample):
        assert classify_sample(make_sample(vibration=0.1, temperature=30.0)) == RiskLevel.HIGH

    def test_thresholds_are_strict(self, make_sample):
        assert classify_sample(make_sample(vibration=0.4, temperature=28.0)) == RiskLevel.LOW
        assert classify_sample(make_sample(vibration=0.5, temperature=29.5)) == RiskLevel.MEDIUM


class TestScenarios:
    def test_medium_risk_pulls_service_in_one_month(self, make_sample):
        state = _estimate(make_sample(vibration=0.45, temperature=25.0))
        assert state.predicted_risk == RiskLevel.MEDIUM
        assert state.next_service_date == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_high_risk_schedules_urgent_service(self, make_sample):
        state = _estimate(make_sample(vibration=0.55, temperature=30.0))
        assert state.predicted_risk == RiskLevel.HIGH
        assert state.next_service_date == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_low_risk_uses_full_interval(self, make_sample):
        state = _estimate(make_sample(vibration=0.2, temperature=22.0))
        assert state.predicted_risk == RiskLevel.LOW
        assert state.next_service_date == datetime(2024, 7, 1, tzinfo=timezone.utc)

    def test_records_sample_time(self, make_sample, now):
        assert _estimate(make_sample()).last_sample_at == now


class TestStatusOverrides:
    def test_critical_is_always_high(self, make_sample):
        state = _estimate(make_sample(vibration=0.1, temperature=20.0), status=EquipmentStatus.CRITICAL)
        assert state.predicted_risk == RiskLevel.HIGH

    def test_critical_keeps_sample_schedule(self, make_sample):
        state = _estimate(make_sample(vibration=0.1, temperature=20.0), status=EquipmentStatus.CRITICAL)
        assert state.next_service_date == datetime(2024, 7, 1, tzinfo=timezone.utc)

    def test_warning_raises_low_to_medium(self, make_sample):
        state = _estimate(make_sample(vibration=0.1, temperature=20.0), status=EquipmentStatus.WARNING)
        assert state.predicted_risk == RiskLevel.MEDIUM
        # Only the risk changes; the date still follows the sample
        assert state.next_service_date == datetime(2024, 7, 1, tzinfo=timezone.utc)

    def test_warning_keeps_high(self):
        assert apply_status_override(RiskLevel.HIGH, EquipmentStatus.WARNING) == RiskLevel.HIGH

    def test_initial_state_honours_override(self):
        assert initial_state("eq-x", EquipmentStatus.CRITICAL).predicted_risk == RiskLevel.HIGH
        assert initial_state("eq-x").predicted_risk == RiskLevel.LOW

    @pytest.mark.parametrize("status", [EquipmentStatus.MAINTENANCE, EquipmentStatus.OFFLINE])
    def test_suspended_freezes_risk(self, make_sample, status):
        previous = _estimate(make_sample(vibration=0.45))
        state = estimate(previous, make_sample(vibration=0.9), status, JAN_1, interval_months=6)
        assert state.predicted_risk == RiskLevel.MEDIUM
        assert state.next_service_date is None
        assert state.status == status
        assert state.last_sample_at == previous.last_sample_at


class TestOrdering:
    def test_out_of_order_sample_raises(self, make_sample, now):
        previous = _estimate(make_sample())
        with pytest.raises(OutOfOrderSampleError) as exc_info:
            _estimate(make_sample(timestamp=now - timedelta(minutes=1)), previous=previous)
        assert exc_info.value.equipment_id == "eq-test"
        assert exc_info.value.latest == now

    def test_equal_timestamp_accepted(self, make_sample):
        previous = _estimate(make_sample())
        state = _estimate(make_sample(vibration=0.55), previous=previous)
        assert state.predicted_risk == RiskLevel.HIGH

    def test_risk_is_monotonic_in_vibration(self, make_sample):
        risks = [
            RISK_ORDER[_estimate(make_sample(vibration=v / 100, temperature=20.0)).predicted_risk]
            for v in range(0, 100, 5)
        ]
        assert risks == sorted(risks)

    def test_risk_is_monotonic_in_temperature(self, make_sample):
        risks = [
            RISK_ORDER[_estimate(make_sample(vibration=0.1, temperature=t / 2)).predicted_risk]
            for t in range(40, 70)
        ]
        assert risks == sorted(risks)

    def test_naive_sample_after_aware_sample(self, make_sample):
        previous = _estimate(make_sample(timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc)))
        state = _estimate(make_sample(vibration=0.45, timestamp=datetime(2024, 3, 2)), previous=previous)
        assert state.predicted_risk == RiskLevel.MEDIUM
        assert state.last_sample_at == datetime(2024, 3, 2, tzinfo=timezone.utc)

    def test_naive_sample_out_of_order(self, make_sample):
        previous = _estimate(make_sample(timestamp=datetime(2024, 3, 2, tzinfo=timezone.utc)))
        with pytest.raises(OutOfOrderSampleError):
            _estimate(make_sample(timestamp=datetime(2024, 3, 1)), previous=previous)


class TestEscalationSchedule:
    @pytest.mark.parametrize("status", [EquipmentStatus.OK, EquipmentStatus.WARNING])
    def test_service_date_never_moves_later_while_escalating(self, make_sample, now, status):
        readings = [(0.2, 22.0), (0.3, 24.0), (0.45, 25.0), (0.48, 28.5), (0.55, 30.0), (0.7, 31.0)]
        state = initial_state("eq-test", status)
        dates, risks = [], []
        for step, (vibration, temperature) in enumerate(readings):
            sample = make_sample(vibration=vibration, temperature=temperature, timestamp=now + timedelta(hours=step))
            state = estimate(state, sample, status, JAN_1, interval_months=6)
            dates.append(state.next_service_date)
            risks.append(RISK_ORDER[state.predicted_risk])

        assert risks == sorted(risks)
        assert risks[-1] == RISK_ORDER[RiskLevel.HIGH]
        assert all(later <= earlier for earlier, later in zip(dates, dates[1:]))
        assert dates[0] == datetime(2024, 7, 1, tzinfo=timezone.utc)
        assert dates[-1] == datetime(2024, 2, 1, tzinfo=timezone.utc)


class TestReassess:
    def test_without_samples_returns_initial(self):
        state = reassess(initial_state("eq-x"), None, EquipmentStatus.WARNING, JAN_1, 6)
        assert state.predicted_risk == RiskLevel.MEDIUM
        assert state.next_service_date is None

    def test_uses_latest_sample(self, make_sample):
        sample = make_sample(vibration=0.45)
        previous = _estimate(sample)
        later = datetime(2024, 3, 1, tzinfo=timezone.utc)
        state = reassess(previous, sample, EquipmentStatus.OK, later, 6)
        assert state.next_service_date == datetime(2024, 8, 1, tzinfo=timezone.utc)


class TestNextServiceDate:
    def test_custom_interval(self):
        assert next_service_date(RiskLevel.LOW, JAN_1, interval_months=12) == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert next_service_date(RiskLevel.MEDIUM, JAN_1, interval_months=12) == datetime(2024, 12, 1, tzinfo=timezone.utc)


class TestEscalationAlert:
    def test_alert_on_crossing_into_high(self, make_sample, make_equipment):
        sample = make_sample(vibration=0.6)
        previous = _estimate(make_sample())
        current = _estimate(sample, previous=previous)
        alert = escalation_alert(previous, current, make_equipment(), sample)
        assert alert is not None
        assert alert.equipment_id == "eq-test"
        assert alert.equipment_name == "Test Boiler"
        assert alert.severity == "Warning"
        assert not alert.acknowledged
        assert alert.timestamp == sample.timestamp

    def test_no_alert_while_staying_high(self, make_sample, make_equipment):
        sample = make_sample(vibration=0.6)
        previous = _estimate(sample)
        current = _estimate(sample, previous=previous)
        assert escalation_alert(previous, current, make_equipment(), sample) is None

    def test_no_alert_below_high(self, make_sample, make_equipment):
        sample = make_sample(vibration=0.45)
        previous = _estimate(make_sample())
        current = _estimate(sample, previous=previous)
        assert escalation_alert(previous, current, make_equipment(), sample) is None
