"""
tests/test_simulator.py
────────────────────────
Tests for the synthetic telemetry simulator.
"""
from datetime import timedelta

import pandas as pd

from src.data.simulator import baseline_sample, generate_history, next_sample, to_dataframe

IDS = ["eq-1", "eq-2"]


class TestGenerateHistory:
    def test_returns_every_unit(self, now):
        history = generate_history(IDS, seed=42, days=3, end=now)
        assert set(history) == set(IDS)

    def test_one_sample_per_day(self, now):
        history = generate_history(IDS, seed=42, days=5, end=now)
        assert len(history["eq-1"]) == 5
        assert history["eq-1"][-1].timestamp == now
        assert history["eq-1"][0].timestamp == now - timedelta(days=4)

    def test_samples_are_chronological(self, now):
        timestamps = [s.timestamp for s in generate_history(IDS, seed=42, days=10, end=now)["eq-2"]]
        assert timestamps == sorted(timestamps)

    def test_values_in_operating_range(self, now):
        for sample in generate_history(IDS, seed=42, days=10, end=now)["eq-1"]:
            assert 0.1 <= sample.vibration <= 0.6
            assert 20.0 <= sample.temperature <= 30.0
            assert 1.0 <= sample.energy_consumption <= 3.0

    def test_usage_counter_offset_per_unit(self, now):
        history = generate_history(IDS, seed=42, days=2, end=now)
        assert history["eq-1"][0].usage_hours < 1000.0
        assert history["eq-2"][0].usage_hours >= 1000.0

    def test_reproducibility(self, now):
        h1 = generate_history(IDS, seed=99, days=3, end=now)
        h2 = generate_history(IDS, seed=99, days=3, end=now)
        assert h1 == h2

    def test_different_seeds_differ(self, now):
        h1 = generate_history(IDS, seed=1, days=3, end=now)
        h2 = generate_history(IDS, seed=2, days=3, end=now)
        assert any(a.vibration != b.vibration for a, b in zip(h1["eq-1"], h2["eq-1"], strict=True))


class TestNextSample:
    def test_step_moves_forward(self, rng, now):
        last = baseline_sample(rng, now, usage_hours=100.0)
        sample = next_sample(last, rng, now + timedelta(seconds=5))
        assert sample.timestamp == now + timedelta(seconds=5)
        assert sample.usage_hours >= last.usage_hours
        assert abs(sample.vibration - last.vibration) <= 0.05

    def test_timestamp_never_goes_backwards(self, rng, now):
        last = baseline_sample(rng, now)
        assert next_sample(last, rng, now - timedelta(hours=1)).timestamp == now

    def test_walk_stays_valid(self, rng, now):
        sample = baseline_sample(rng, now)
        for i in range(200):
            sample = next_sample(sample, rng, now + timedelta(seconds=i))
            assert sample.vibration >= 0.0
            assert sample.temperature >= 15.0


class TestToDataframe:
    def test_returns_dataframe(self, now):
        df = to_dataframe(generate_history(IDS, seed=42, days=4, end=now)["eq-1"])
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 4
        assert str(df["timestamp"].dt.tz) == "UTC"

    def test_empty_keeps_columns(self):
        df = to_dataframe([])
        assert df.empty
        assert "vibration" in df.columns
