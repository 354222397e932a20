"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the maintenance dashboard test suite.
"""
import os
from datetime import datetime, timezone

import numpy as np
import pytest

os.environ.setdefault("HISTORY_DAYS", "7")
os.environ.setdefault("SIMULATION_SEED", "42")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_sample(now):
    """Factory for HealthSamples; defaults are a healthy reading taken at `now`."""
    from src.data.models import HealthSample

    def _make(vibration=0.2, temperature=24.0, timestamp=None, usage_hours=100.0, energy_consumption=1.5):
        return HealthSample(
            timestamp=timestamp or now,
            vibration=vibration,
            temperature=temperature,
            usage_hours=usage_hours,
            energy_consumption=energy_consumption,
        )

    return _make


@pytest.fixture
def make_equipment():
    from src.data.models import Equipment, EquipmentStatus

    def _make(equipment_id="eq-test", name="Test Boiler", status=EquipmentStatus.OK, last_service_date=None, **extra):
        return Equipment(
            id=equipment_id,
            name=name,
            type="Boiler",
            location="Basement",
            status=status,
            last_service_date=last_service_date or datetime(2024, 1, 1, tzinfo=timezone.utc),
            purchase_date=datetime(2022, 1, 1, tzinfo=timezone.utc),
            **extra,
        )

    return _make


@pytest.fixture
def empty_store():
    from src.data.store import MaintenanceStore
    return MaintenanceStore(interval_months=6, history_limit=50, seed=42)


@pytest.fixture
def store(now):
    """Demo store with 7 days of history ending at `now`."""
    from src.data.store import MaintenanceStore
    return MaintenanceStore.seeded(seed_value=42, days=7, end=now)
