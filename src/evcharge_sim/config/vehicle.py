"""Vehicle inputs — catalog specs and queue requests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VehicleSpec(BaseModel):
    """One vehicle model from the catalog.  Immutable once built.

    ``charge_curve`` holds ``(soc_pct, power_kw)`` samples.  They must be
    strictly increasing in SOC and span exactly 0 %–100 %, so that every
    state of charge a vehicle can reach has a defined charge power.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name, also the catalog key")
    battery_capacity_kwh: float = Field(gt=0, description="Usable battery capacity (kWh)")
    charge_curve: tuple[tuple[float, float], ...] = Field(
        min_length=2,
        description="(state of charge %, charge power kW) samples covering 0–100 %",
    )
    epa_miles: float = Field(default=0.0, ge=0, description="Rated EPA range (miles)")

    @model_validator(mode="after")
    def _check_curve(self) -> VehicleSpec:
        socs = [soc for soc, _ in self.charge_curve]
        if any(b <= a for a, b in zip(socs, socs[1:])):
            raise ValueError("charge_curve state of charge values must be strictly increasing")
        if socs[0] != 0.0 or socs[-1] != 100.0:
            raise ValueError(
                f"charge_curve must span 0–100 %, got {socs[0]}–{socs[-1]} %"
            )
        if any(kw < 0 for _, kw in self.charge_curve):
            raise ValueError("charge_curve power values must be non-negative")
        return self


class VehicleRequest(BaseModel):
    """One vehicle joining the waiting queue."""

    spec: str = Field(description="Name of a VehicleSpec in the scenario catalog")
    start_soc_pct: float = Field(default=10.0, ge=0, le=100, description="State of charge on arrival (%)")
    unplug_soc_pct: float = Field(
        default=80.0, ge=0, le=100,
        description="State of charge at which the driver unplugs (%)",
    )

    @model_validator(mode="after")
    def _check_window(self) -> VehicleRequest:
        if self.unplug_soc_pct < self.start_soc_pct:
            raise ValueError(
                f"unplug_soc_pct ({self.unplug_soc_pct}) must not be below "
                f"start_soc_pct ({self.start_soc_pct})"
            )
        return self
