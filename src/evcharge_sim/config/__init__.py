"""Configuration models — all simulator input types."""

from evcharge_sim.config.vehicle import VehicleRequest, VehicleSpec
from evcharge_sim.config.charger import (
    MIN_CHARGE_POWER_KW,
    ChargerConfig,
    ExclusiveStrategy,
    GranularStrategy,
    LoadSharingStrategy,
    PairedStrategy,
    SplitStrategy,
    check_granular_budget,
)
from evcharge_sim.config.catalog import VEHICLE_CATALOG, get_vehicle_spec
from evcharge_sim.config.scenario import Scenario, SimulationConfig

__all__ = [
    "VehicleSpec",
    "VehicleRequest",
    "MIN_CHARGE_POWER_KW",
    "check_granular_budget",
    "ChargerConfig",
    "ExclusiveStrategy",
    "PairedStrategy",
    "SplitStrategy",
    "GranularStrategy",
    "LoadSharingStrategy",
    "VEHICLE_CATALOG",
    "get_vehicle_spec",
    "SimulationConfig",
    "Scenario",
]
