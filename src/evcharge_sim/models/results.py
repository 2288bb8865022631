"""Result types — the contract between the engine and its consumers.

Frames are write-once: the engine emits one ``SimulationFrame`` per step and
never touches it again.  Units are carried in field names (``_w``, ``_wh``,
``_s``, ``_kw``) so the JSON form is self-describing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════
# Per-step frames
# ═══════════════════════════════════════════════════════════════════════════

class VehicleChargeFrame(BaseModel):
    """One plugged-in vehicle during one step."""

    model_config = ConfigDict(frozen=True)

    vehicle_id: int
    """Handle returned when the vehicle was enqueued."""

    allocated_power_w: int
    """Power granted by the charger for this step."""

    state_of_charge_pct: float
    """State of charge after this step's charging."""


class ChargerFrame(BaseModel):
    """One charger during one step."""

    model_config = ConfigDict(frozen=True)

    charger_id: int
    """Position of the charger in the simulation's charger list."""

    active_power_w: int
    """Σ allocated power over its plugs."""

    unused_power_w: int
    """grid_connection − active_power.  Negative only when the 5 kW floor lifts a plug above its share."""


class SimulationFrame(BaseModel):
    """Immutable snapshot of one simulation step."""

    model_config = ConfigDict(frozen=True)

    step: int
    """1-based step index."""

    energy_dispensed_wh: float
    """Energy delivered to all vehicles during this step."""

    chargers: tuple[ChargerFrame, ...]
    vehicles: tuple[VehicleChargeFrame, ...]
    """Vehicles still plugged in after re-allocation, in charger then plug order."""

    elapsed_s: float
    """Cumulative simulated time at the end of this step."""


# ═══════════════════════════════════════════════════════════════════════════
# Run summary
# ═══════════════════════════════════════════════════════════════════════════

class ChargerUtilisation(BaseModel):
    """Aggregate load on one charger over the whole run."""

    charger_id: int
    grid_connection_kw: float
    mean_active_kw: float
    peak_active_kw: float
    utilisation: float
    """mean_active / grid_connection (0–1; can exceed 1 only through the minimum-rate floor)."""


class RunSummary(BaseModel):
    """Totals for display once a run completes."""

    is_valid: bool
    """False when the run had no chargers or no vehicles (and so no frames)."""

    num_steps: int = 0
    num_vehicles: int = 0
    num_chargers: int = 0
    step_seconds: float = 0.0

    total_energy_dispensed_kwh: float = 0.0
    total_duration_s: float = 0.0

    peak_power_kw: float = 0.0
    """Highest site-wide allocated power in any step."""

    max_vehicles_charging: int = 0

    charger_utilisation: list[ChargerUtilisation] = Field(default_factory=list)

    @property
    def total_duration_minutes(self) -> float:
        return self.total_duration_s / 60.0


class SimulationResult(BaseModel):
    """Complete output of one simulation run."""

    frames: tuple[SimulationFrame, ...] = ()
    summary: RunSummary
    vehicle_names: dict[int, str] = Field(default_factory=dict)
    """Vehicle id → model name, for labelling per-vehicle series."""


# ═══════════════════════════════════════════════════════════════════════════
# Derived figures
# ═══════════════════════════════════════════════════════════════════════════

class CurveSummary(BaseModel):
    """Headline figures for one vehicle model's charge curve."""

    name: str
    battery_capacity_kwh: float
    average_power_kw: float
    """Mean power across the full 0–100 % curve."""

    average_power_10_80_kw: float | None
    """Mean power across the 10 → 80 % window.  None if the window is degenerate."""

    epa_miles: float


# ═══════════════════════════════════════════════════════════════════════════
# Series (frames reshaped per entity)
# ═══════════════════════════════════════════════════════════════════════════

class VehicleSeries(BaseModel):
    """Allocated power over time for one vehicle."""

    vehicle_id: int
    name: str
    minutes: list[float] = Field(default_factory=list)
    power_kw: list[float] = Field(default_factory=list)
    state_of_charge_pct: list[float] = Field(default_factory=list)


class ChargerSeries(BaseModel):
    """Used and unused power over time for one charger."""

    charger_id: int
    minutes: list[float] = Field(default_factory=list)
    used_kw: list[float] = Field(default_factory=list)
    unused_kw: list[float] = Field(default_factory=list)
