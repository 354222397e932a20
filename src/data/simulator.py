"""
src/data/simulator.py
─────────────────────
Synthetic health telemetry for office/facility equipment.

Generates:
  - `days` of daily history per unit (seeded, reproducible)
  - One fresh sample per live tick as a bounded random walk from the last one

Operating ranges for normal operation:
  vibration          0.1 – 0.6 mm/s
  temperature        20 – 30 °C
  usage hours        ~8 h per day, cumulative
  energy             1 – 3 kWh per interval
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import numpy as np
import pandas as pd

from config.settings import settings
from src.data.models import HealthSample

# Per-tick random-walk step scales; the 0.45 centre gives a slight upward drift
DRIFT_CENTER = 0.45
STEP: dict[str, float] = {
    "vibration": 0.05,
    "temperature": 0.5,
    "usage_hours": 0.5,
    "energy_consumption": 0.1,
}
MIN_TEMPERATURE_C = 15.0
HOURS_PER_DAY = 8.0


def baseline_sample(rng: np.random.Generator, timestamp: datetime, usage_hours: float = 0.0) -> HealthSample:
    """A fresh sample drawn from the normal operating ranges."""
    return HealthSample(
        timestamp=timestamp,
        vibration=round(float(rng.uniform(0.1, 0.6)), 2),
        temperature=round(float(rng.uniform(20.0, 30.0)), 1),
        usage_hours=round(usage_hours + float(rng.uniform(0.0, 1.0)), 2),
        energy_consumption=round(float(rng.uniform(1.0, 3.0)), 2),
    )


def generate_history(
    equipment_ids: list[str],
    seed: int = settings.SIMULATION_SEED,
    days: int = settings.HISTORY_DAYS,
    end: datetime | None = None,
) -> dict[str, list[HealthSample]]:
    """
    Generate `days` daily samples for each unit, oldest first.

    Unit i starts its usage counter at i × 1000 h. Returns dict keyed by
    equipment id.
    """
    rng = np.random.default_rng(seed)
    end_ts = end or datetime.now(tz=UTC).replace(microsecond=0)
    timestamps = [end_ts - timedelta(days=days - 1 - d) for d in range(days)]

    history: dict[str, list[HealthSample]] = {}
    for index, equipment_id in enumerate(equipment_ids):
        base_usage = index * 1000.0
        history[equipment_id] = [
            baseline_sample(rng, ts, base_usage + d * HOURS_PER_DAY) for d, ts in enumerate(timestamps)
        ]
    return history


def next_sample(last: HealthSample, rng: np.random.Generator, timestamp: datetime | None = None) -> HealthSample:
    """
    Step the random walk one tick forward from `last`.

    Usage hours never decrease and the timestamp never goes backwards.
    """
    ts = timestamp or datetime.now(tz=UTC)
    ts = max(ts, last.timestamp)
    return HealthSample(
        timestamp=ts,
        vibration=round(max(0.0, last.vibration + (rng.random() - DRIFT_CENTER) * STEP["vibration"]), 2),
        temperature=round(
            max(MIN_TEMPERATURE_C, last.temperature + (rng.random() - DRIFT_CENTER) * STEP["temperature"]), 1
        ),
        usage_hours=round(last.usage_hours + rng.random() * STEP["usage_hours"], 2),
        energy_consumption=round(last.energy_consumption + rng.random() * STEP["energy_consumption"], 2),
    )


def to_dataframe(samples: list[HealthSample]) -> pd.DataFrame:
    """Convert a list of HealthSamples to a pandas DataFrame (chart input)."""
    columns = list(HealthSample.model_fields)
    if not samples:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame([s.model_dump() for s in samples], columns=columns)
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df
