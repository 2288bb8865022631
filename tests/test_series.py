"""Tests for engine/series.py — per-entity series and the long-format table."""

from __future__ import annotations

import pytest

from evcharge_sim.config import ChargerConfig, Scenario
from evcharge_sim.engine.orchestrator import run_engine
from evcharge_sim.engine.series import FRAME_COLUMNS, build_series, frames_to_dataframe


@pytest.fixture
def result(mixed_scenario):
    return run_engine(mixed_scenario)


class TestBuildSeries:

    def test_one_series_per_entity(self, result, mixed_scenario):
        vehicles, chargers = build_series(result)
        assert [v.vehicle_id for v in vehicles] == [0, 1, 2, 3, 4]
        assert [c.charger_id for c in chargers] == [0, 1, 2, 3]
        assert vehicles[1].name == "Chevy Bolt 2022"

    def test_charger_series_cover_every_step(self, result):
        _, chargers = build_series(result)
        for c in chargers:
            assert len(c.minutes) == len(c.used_kw) == len(c.unused_kw) == len(result.frames)
            assert c.minutes[0] == 0.5

    def test_used_plus_unused_is_grid(self, result, mixed_scenario):
        _, chargers = build_series(result)
        for c, cfg in zip(chargers, mixed_scenario.chargers):
            for used, unused in zip(c.used_kw, c.unused_kw):
                assert used + unused == pytest.approx(cfg.grid_connection_kw)

    def test_vehicle_series_only_while_plugged(self, result):
        vehicles, _ = build_series(result)
        plugged = {vid: 0 for vid in range(5)}
        for f in result.frames:
            for v in f.vehicles:
                plugged[v.vehicle_id] += 1
        for v in vehicles:
            assert len(v.minutes) == len(v.power_kw) == len(v.state_of_charge_pct) == plugged[v.vehicle_id]

    def test_vehicle_soc_never_decreases(self, result):
        vehicles, _ = build_series(result)
        for v in vehicles:
            assert v.state_of_charge_pct == sorted(v.state_of_charge_pct)

    def test_invalid_run_has_empty_series(self):
        result = run_engine(Scenario(chargers=[ChargerConfig()]))
        assert build_series(result) == ([], [])


class TestFramesToDataFrame:

    def test_columns_and_row_count(self, result):
        df = frames_to_dataframe(result)
        assert list(df.columns) == FRAME_COLUMNS
        expected = sum(len(f.chargers) + len(f.vehicles) for f in result.frames)
        assert len(df) == expected

    def test_entity_split(self, result):
        df = frames_to_dataframe(result)
        chargers = df[df["entity"] == "charger"]
        vehicles = df[df["entity"] == "vehicle"]
        assert chargers["state_of_charge_pct"].isna().all()
        assert vehicles["unused_kw"].isna().all()
        assert not vehicles["state_of_charge_pct"].isna().any()

    def test_energy_from_table(self, result, mixed_scenario):
        df = frames_to_dataframe(result)
        step_h = mixed_scenario.simulation.step_seconds / 3_600
        vehicles = df[df["entity"] == "vehicle"]
        assert (vehicles["power_kw"].sum() * step_h) == pytest.approx(
            result.summary.total_energy_dispensed_kwh
        )

    def test_empty_result(self):
        df = frames_to_dataframe(run_engine(Scenario(chargers=[ChargerConfig()])))
        assert df.empty
        assert list(df.columns) == FRAME_COLUMNS
