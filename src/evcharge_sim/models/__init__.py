"""Quantity types and result models — simulation output contracts."""

from evcharge_sim.models.quantities import Energy, Percentage, Power
from evcharge_sim.models.results import (
    ChargerFrame,
    ChargerSeries,
    ChargerUtilisation,
    CurveSummary,
    RunSummary,
    SimulationFrame,
    SimulationResult,
    VehicleChargeFrame,
    VehicleSeries,
)

__all__ = [
    "Energy",
    "Percentage",
    "Power",
    "ChargerFrame",
    "ChargerSeries",
    "ChargerUtilisation",
    "CurveSummary",
    "RunSummary",
    "SimulationFrame",
    "SimulationResult",
    "VehicleChargeFrame",
    "VehicleSeries",
]
