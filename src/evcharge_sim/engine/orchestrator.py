"""Scenario orchestrator — builds the engine from config and runs it.

Entry point: ``run_engine(scenario)``
  1. one ``VehicleModel`` per catalog spec that the queue references
  2. vehicles enqueued in scenario order (handle == list position)
  3. chargers built in scenario order (charger_id == list position)
  4. step to completion, then aggregate a ``RunSummary``
"""

from __future__ import annotations

import logging
from datetime import timedelta

import numpy as np

from evcharge_sim.config.scenario import Scenario
from evcharge_sim.engine.charger import Charger
from evcharge_sim.engine.simulation import Simulation
from evcharge_sim.engine.vehicle import Vehicle, VehicleModel
from evcharge_sim.models.quantities import Percentage
from evcharge_sim.models.results import (
    ChargerUtilisation,
    RunSummary,
    SimulationFrame,
    SimulationResult,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Public entry points
# ═══════════════════════════════════════════════════════════════════════════

def build_simulation(scenario: Scenario) -> tuple[Simulation, dict[int, str]]:
    """Construct a ready-to-run ``Simulation`` and its vehicle-id → name map."""
    specs = {s.name: s for s in scenario.catalog}
    models: dict[str, VehicleModel] = {}

    sim = Simulation(
        chargers=[Charger.from_config(c) for c in scenario.chargers],
        step_duration=timedelta(seconds=scenario.simulation.step_seconds),
    )

    names: dict[int, str] = {}
    for request in scenario.vehicles:
        model = models.get(request.spec)
        if model is None:
            model = models[request.spec] = VehicleModel.from_spec(specs[request.spec])
        vehicle = Vehicle.at_soc(
            model,
            Percentage.from_float(request.start_soc_pct),
            Percentage.from_float(request.unplug_soc_pct),
        )
        names[sim.enqueue(vehicle)] = model.name

    return sim, names


def run_engine(scenario: Scenario) -> SimulationResult:
    """Run ``scenario`` to completion and return frames plus summary."""
    sim, names = build_simulation(scenario)
    frames = sim.run()
    summary = summarise_run(frames, scenario, sim.is_valid())
    logger.info(
        "run complete: %.1f kWh over %.1f min across %d chargers",
        summary.total_energy_dispensed_kwh,
        summary.total_duration_minutes,
        summary.num_chargers,
    )
    return SimulationResult(frames=frames, summary=summary, vehicle_names=names)


# ═══════════════════════════════════════════════════════════════════════════
# Aggregation
# ═══════════════════════════════════════════════════════════════════════════

def summarise_run(
    frames: tuple[SimulationFrame, ...],
    scenario: Scenario,
    is_valid: bool,
) -> RunSummary:
    """Aggregate frames into display totals."""
    base = dict(
        is_valid=is_valid,
        num_vehicles=len(scenario.vehicles),
        num_chargers=len(scenario.chargers),
        step_seconds=scenario.simulation.step_seconds,
    )
    if not frames:
        return RunSummary(**base)

    energy_wh = np.array([f.energy_dispensed_wh for f in frames])
    # rows = steps, columns = chargers
    active_w = np.array([[c.active_power_w for c in f.chargers] for f in frames], dtype=float)
    site_w = active_w.sum(axis=1)
    grid_kw = np.array([c.grid_connection_kw for c in scenario.chargers])

    mean_kw = active_w.mean(axis=0) / 1_000
    peak_kw = active_w.max(axis=0) / 1_000
    utilisation = [
        ChargerUtilisation(
            charger_id=i,
            grid_connection_kw=float(grid_kw[i]),
            mean_active_kw=round(float(mean_kw[i]), 4),
            peak_active_kw=round(float(peak_kw[i]), 4),
            utilisation=round(float(mean_kw[i] / grid_kw[i]), 4),
        )
        for i in range(len(grid_kw))
    ]

    return RunSummary(
        **base,
        num_steps=len(frames),
        total_energy_dispensed_kwh=float(energy_wh.sum()) / 1_000,
        total_duration_s=frames[-1].elapsed_s,
        peak_power_kw=float(site_w.max()) / 1_000,
        max_vehicles_charging=max(len(f.vehicles) for f in frames),
        charger_utilisation=utilisation,
    )
