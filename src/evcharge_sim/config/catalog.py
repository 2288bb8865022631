"""Built-in vehicle catalog.

Curves are DC fast-charge samples as ``(soc %, kW)``; capacities are usable
kWh.  Shared read-only by every scenario that does not supply its own.
"""

from __future__ import annotations

from typing import Iterable

from evcharge_sim.config.vehicle import VehicleSpec
from evcharge_sim.errors import VehicleLookupError

VEHICLE_CATALOG: tuple[VehicleSpec, ...] = (
    VehicleSpec(
        name="KIA EV6 Long Range AWD",
        battery_capacity_kwh=77.4,
        charge_curve=(
            (0.0, 20.0),
            (2.0, 220.0),
            (45.0, 238.0),
            (50.0, 198.0),
            (55.0, 198.0),
            (60.0, 100.0),
            (70.0, 198.0),
            (77.0, 75.0),
            (78.0, 168.0),
            (82.0, 10.0),
            (83.0, 125.0),
            (100.0, 20.0),
        ),
        epa_miles=270.0,
    ),
    VehicleSpec(
        name="Lucid Air Grand Touring",
        battery_capacity_kwh=112.0,
        charge_curve=(
            (0.0, 200.0),
            (2.0, 280.0),
            (10.0, 300.0),
            (20.0, 290.0),
            (80.0, 100.0),
            (100.0, 10.0),
        ),
        epa_miles=510.0,
    ),
    VehicleSpec(
        name="Porsche Taycan 2022",
        battery_capacity_kwh=93.4,
        charge_curve=(
            (0.0, 260.0),
            (21.0, 265.0),
            (22.0, 250.0),
            (28.0, 200.0),
            (80.0, 100.0),
            (100.0, 10.0),
        ),
        epa_miles=510.0,
    ),
    VehicleSpec(
        name="Chevy Bolt 2022",
        battery_capacity_kwh=65.0,
        charge_curve=(
            (0.0, 55.0),
            (50.0, 55.0),
            (70.0, 33.0),
            (93.0, 26.0),
            (100.0, 5.0),
        ),
        epa_miles=259.0,
    ),
    VehicleSpec(
        name="Tesla Model 3 LR AWD 2021",
        battery_capacity_kwh=82.0,
        charge_curve=(
            (0.0, 80.0),
            (8.0, 225.0),
            (11.0, 250.0),
            (20.0, 250.0),
            (24.0, 250.0),
            (26.0, 200.0),
            (34.0, 200.0),
            (36.0, 150.0),
            (66.0, 120.0),
            (69.0, 120.0),
            (80.0, 60.0),
            (100.0, 20.0),
        ),
        epa_miles=358.0,
    ),
    VehicleSpec(
        name="Rivian R1S Standard Pack",
        battery_capacity_kwh=105.0,
        charge_curve=(
            (0.0, 100.0),
            (1.0, 190.0),
            (47.0, 230.0),
            (50.0, 173.0),
            (55.0, 147.0),
            (57.0, 175.0),
            (60.0, 145.0),
            (70.0, 75.0),
            (80.0, 75.0),
            (100.0, 15.0),
        ),
        epa_miles=352.0,
    ),
    VehicleSpec(
        name="GMC Hummer EV Pickup",
        battery_capacity_kwh=212.0,
        charge_curve=(
            (0.0, 150.0),
            (1.0, 335.0),
            (2.0, 338.0),
            (34.0, 345.0),
            (36.0, 306.0),
            (40.0, 294.0),
            (50.0, 257.0),
            (62.0, 255.0),
            (70.0, 115.0),
            (80.0, 45.0),
            (83.0, 17.0),
            (90.0, 51.0),
            (100.0, 15.0),
        ),
        epa_miles=352.0,
    ),
)


def get_vehicle_spec(name: str, catalog: Iterable[VehicleSpec] | None = None) -> VehicleSpec:
    """Look up a spec by name.  Raises ``VehicleLookupError`` if absent."""
    for spec in (catalog if catalog is not None else VEHICLE_CATALOG):
        if spec.name == name:
            return spec
    raise VehicleLookupError(name)
