"""Reshape frames into per-entity series and a long-format table.

Frames are step-major; charts and analyses usually want one series per
vehicle or charger.  Nothing here renders anything.
"""

from __future__ import annotations

import pandas as pd

from evcharge_sim.models.results import ChargerSeries, SimulationResult, VehicleSeries

FRAME_COLUMNS = [
    "step",
    "minutes",
    "entity",
    "entity_id",
    "power_kw",
    "unused_kw",
    "state_of_charge_pct",
]


def build_series(result: SimulationResult) -> tuple[list[VehicleSeries], list[ChargerSeries]]:
    """Per-vehicle allocated power and per-charger used/unused power over time.

    Vehicles appear in handle order, including vehicles that never got a
    plug (their series are empty).  Chargers appear in list order.
    """
    vehicles = {
        vid: VehicleSeries(vehicle_id=vid, name=name)
        for vid, name in sorted(result.vehicle_names.items())
    }
    chargers: dict[int, ChargerSeries] = {}
    if result.frames:
        chargers = {c.charger_id: ChargerSeries(charger_id=c.charger_id) for c in result.frames[0].chargers}

    for frame in result.frames:
        minutes = frame.elapsed_s / 60.0
        for v in frame.vehicles:
            series = vehicles.setdefault(v.vehicle_id, VehicleSeries(vehicle_id=v.vehicle_id, name=""))
            series.minutes.append(minutes)
            series.power_kw.append(v.allocated_power_w / 1_000)
            series.state_of_charge_pct.append(v.state_of_charge_pct)
        for c in frame.chargers:
            series = chargers[c.charger_id]
            series.minutes.append(minutes)
            series.used_kw.append(c.active_power_w / 1_000)
            series.unused_kw.append(c.unused_power_w / 1_000)

    return list(vehicles.values()), list(chargers.values())


def frames_to_dataframe(result: SimulationResult) -> pd.DataFrame:
    """Long-format table: one row per (step, charger) and per (step, vehicle).

    ``entity`` is ``"charger"`` or ``"vehicle"``; ``unused_kw`` is only set on
    charger rows and ``state_of_charge_pct`` only on vehicle rows.
    """
    rows = []
    for frame in result.frames:
        minutes = frame.elapsed_s / 60.0
        for c in frame.chargers:
            rows.append((
                frame.step, minutes, "charger", c.charger_id,
                c.active_power_w / 1_000, c.unused_power_w / 1_000, None,
            ))
        for v in frame.vehicles:
            rows.append((
                frame.step, minutes, "vehicle", v.vehicle_id,
                v.allocated_power_w / 1_000, None, v.state_of_charge_pct,
            ))
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    return df.astype({"unused_kw": float, "state_of_charge_pct": float})
