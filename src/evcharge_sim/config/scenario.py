"""Top-level scenario — vehicles, chargers and step settings for one run."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from evcharge_sim.config.catalog import VEHICLE_CATALOG
from evcharge_sim.config.charger import ChargerConfig
from evcharge_sim.config.vehicle import VehicleRequest, VehicleSpec


class SimulationConfig(BaseModel):
    """Simulation-level settings."""

    step_seconds: float = Field(
        default=1.0, gt=0,
        description="Simulated time per step (seconds).  Smaller steps track "
                    "the charge curve more closely at the cost of more frames.",
    )


class Scenario(BaseModel):
    """Complete input bundle for one simulation run.

    ``vehicles`` is the waiting queue in arrival order; each entry names a
    spec in ``catalog``.  Empty ``vehicles`` or ``chargers`` is allowed and
    produces an invalid (frameless) run rather than a validation error.
    """

    catalog: list[VehicleSpec] = Field(default_factory=lambda: list(VEHICLE_CATALOG))
    vehicles: list[VehicleRequest] = Field(default_factory=list)
    chargers: list[ChargerConfig] = Field(default_factory=list)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)

    @model_validator(mode="after")
    def _check_references(self) -> Scenario:
        names = [s.name for s in self.catalog]
        if len(set(names)) != len(names):
            raise ValueError("catalog vehicle names must be unique")
        known = set(names)
        missing = sorted({v.spec for v in self.vehicles} - known)
        if missing:
            raise ValueError(f"vehicles reference unknown specs: {missing}")
        return self
