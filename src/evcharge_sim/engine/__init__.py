"""Engine — charge curves, vehicles, chargers and the step loop."""

from evcharge_sim.engine.curve import ChargeCurve, CurvePoint
from evcharge_sim.engine.vehicle import MIN_CHARGE_POWER, Vehicle, VehicleModel
from evcharge_sim.engine.charger import Charger, ChargingVehicle
from evcharge_sim.engine.simulation import Simulation
from evcharge_sim.engine.derived import compute_curve_summary, estimate_charge_time
from evcharge_sim.engine.orchestrator import build_simulation, run_engine
from evcharge_sim.engine.series import build_series, frames_to_dataframe

__all__ = [
    "ChargeCurve",
    "CurvePoint",
    "MIN_CHARGE_POWER",
    "Vehicle",
    "VehicleModel",
    "Charger",
    "ChargingVehicle",
    "Simulation",
    "compute_curve_summary",
    "estimate_charge_time",
    # Scenario-level
    "build_simulation",
    "run_engine",
    "build_series",
    "frames_to_dataframe",
]
