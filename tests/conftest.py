"""Shared test fixtures — vehicle specs, models and charger configs."""

from __future__ import annotations

from datetime import timedelta

import pytest

from evcharge_sim.config import (
    ChargerConfig,
    ExclusiveStrategy,
    GranularStrategy,
    PairedStrategy,
    Scenario,
    SimulationConfig,
    SplitStrategy,
    VehicleRequest,
    VehicleSpec,
    get_vehicle_spec,
)
from evcharge_sim.engine.vehicle import Vehicle, VehicleModel
from evcharge_sim.models.quantities import Percentage

KIA = "KIA EV6 Long Range AWD"


@pytest.fixture
def simple_spec() -> VehicleSpec:
    """100 kWh, 100 kW flat to 50 %, then tapering linearly to 20 kW at 100 %.

    Hand-calculable:
      full-curve average    = (100·0.5 + 60·0.5) = 80 kW
      power at 75 %         = 100 − 80·0.5 = 60 kW
    """
    return VehicleSpec(
        name="Test EV",
        battery_capacity_kwh=100.0,
        charge_curve=((0.0, 100.0), (50.0, 100.0), (100.0, 20.0)),
        epa_miles=300.0,
    )


@pytest.fixture
def simple_model(simple_spec: VehicleSpec) -> VehicleModel:
    return VehicleModel.from_spec(simple_spec)


@pytest.fixture
def flat_spec() -> VehicleSpec:
    """Accepts 400 kW at any SOC, so the charger is always the limit."""
    return VehicleSpec(
        name="Flat 400",
        battery_capacity_kwh=100.0,
        charge_curve=((0.0, 400.0), (100.0, 400.0)),
    )


@pytest.fixture
def flat_model(flat_spec: VehicleSpec) -> VehicleModel:
    return VehicleModel.from_spec(flat_spec)


@pytest.fixture
def make_vehicle(flat_model: VehicleModel):
    """Factory: flat-curve vehicle charging 10 % → 80 % unless told otherwise."""

    def _make(start: float = 10.0, unplug: float = 80.0, model: VehicleModel | None = None) -> Vehicle:
        return Vehicle.at_soc(
            model or flat_model,
            Percentage.from_float(start),
            Percentage.from_float(unplug),
        )

    return _make


@pytest.fixture
def kia_model() -> VehicleModel:
    return VehicleModel.from_spec(get_vehicle_spec(KIA))


@pytest.fixture
def minute() -> timedelta:
    return timedelta(seconds=60)


@pytest.fixture
def mixed_scenario() -> Scenario:
    """Five catalog vehicles across one charger of each strategy."""
    return Scenario(
        vehicles=[
            VehicleRequest(spec=KIA, start_soc_pct=10, unplug_soc_pct=80),
            VehicleRequest(spec="Chevy Bolt 2022", start_soc_pct=5, unplug_soc_pct=60),
            VehicleRequest(spec="Tesla Model 3 LR AWD 2021", start_soc_pct=20, unplug_soc_pct=90),
            VehicleRequest(spec="GMC Hummer EV Pickup", start_soc_pct=15, unplug_soc_pct=70),
            VehicleRequest(spec=KIA, start_soc_pct=30, unplug_soc_pct=75),
        ],
        chargers=[
            ChargerConfig(name="Solo", grid_connection_kw=350, strategy=ExclusiveStrategy()),
            ChargerConfig(name="Pair", grid_connection_kw=300, strategy=PairedStrategy(number_of_plugs=2)),
            ChargerConfig(name="Split", grid_connection_kw=200, strategy=SplitStrategy(number_of_plugs=2)),
            ChargerConfig(
                name="Granular",
                grid_connection_kw=100,
                strategy=GranularStrategy(number_of_plugs=2, power_step_kw=25, max_per_plug_kw=100),
            ),
        ],
        simulation=SimulationConfig(step_seconds=30),
    )
