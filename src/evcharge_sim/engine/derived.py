"""Derived figures for vehicle models — curve summaries and charge-time estimates.

Pure arithmetic on a model's charge curve:
  avg power (window)  = trapezoidal mean of sub_curve(start, end)
  est. charge time    = (end − start) × capacity / avg power (window)
"""

from __future__ import annotations

from datetime import timedelta

from evcharge_sim.config.vehicle import VehicleSpec
from evcharge_sim.engine.vehicle import VehicleModel
from evcharge_sim.models.quantities import Percentage
from evcharge_sim.models.results import CurveSummary

SUMMARY_WINDOW = (Percentage.from_float(10.0), Percentage.from_float(80.0))


def estimate_charge_time(model: VehicleModel, start: Percentage, end: Percentage) -> timedelta | None:
    """Time to charge from ``start`` to ``end`` at the window's average curve power.

    Ignores charger limits and contention.  None if the window is degenerate
    or the curve delivers no power across it.
    """
    window = model.curve.sub_curve(start, end)
    if window is None:
        return None
    average = window.average_power()
    if average.watts <= 0:
        return None
    return (end - start) * model.capacity / average


def compute_curve_summary(spec: VehicleSpec | VehicleModel) -> CurveSummary:
    """Headline figures shown next to each catalog entry."""
    model = spec if isinstance(spec, VehicleModel) else VehicleModel.from_spec(spec)

    window = model.curve.sub_curve(*SUMMARY_WINDOW)
    window_avg = window.average_power().as_kw() if window is not None else None

    return CurveSummary(
        name=model.name,
        battery_capacity_kwh=round(model.capacity.as_kwh(), 4),
        average_power_kw=model.curve.average_power().as_kw(),
        average_power_10_80_kw=window_avg,
        epa_miles=model.epa_miles,
    )
