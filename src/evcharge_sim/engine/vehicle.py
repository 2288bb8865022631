"""Vehicle runtime — a battery filling along its model's charge curve.

``VehicleModel`` is the parsed, validated form of a catalog ``VehicleSpec``.
It is built once per spec and shared by reference by every ``Vehicle`` of
that model, so curve data is never duplicated.

Per-step contract with the charger:
  request = vehicle.next_power_request(offer)   # None → wants to unplug
  vehicle.charge(allocated_power, dt)           # adds allocated × dt
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from evcharge_sim.config.charger import MIN_CHARGE_POWER_KW
from evcharge_sim.config.vehicle import VehicleSpec
from evcharge_sim.engine.curve import ChargeCurve
from evcharge_sim.errors import CurveError, NegativeChargePowerError
from evcharge_sim.models.quantities import Energy, Percentage, Power

MIN_CHARGE_POWER = Power.from_kw(MIN_CHARGE_POWER_KW)

# Stored energy at or below this reads as an empty battery.
EMPTY_NOISE_FLOOR = Energy(1.0)


@dataclass(frozen=True, eq=False)
class VehicleModel:
    """Immutable vehicle model: capacity plus a full-domain charge curve."""

    name: str
    capacity: Energy
    curve: ChargeCurve
    epa_miles: float = 0.0

    def __post_init__(self) -> None:
        if not self.curve.spans_full_domain():
            raise CurveError(
                f"charge curve for {self.name!r} must span 0%–100%, "
                f"got {self.curve.first.state_of_charge}–{self.curve.last.state_of_charge}"
            )
        if self.capacity.watt_hours <= 0:
            raise CurveError(f"battery capacity for {self.name!r} must be positive")

    @classmethod
    def from_spec(cls, spec: VehicleSpec) -> VehicleModel:
        return cls(
            name=spec.name,
            capacity=Energy.from_kwh(spec.battery_capacity_kwh),
            curve=ChargeCurve.from_pairs(spec.charge_curve),
            epa_miles=spec.epa_miles,
        )

    def energy_at(self, soc: Percentage) -> Energy:
        """Stored energy at the given state of charge."""
        return soc * self.capacity


class Vehicle:
    """A vehicle in the simulation: stored energy against an unplug threshold."""

    def __init__(self, model: VehicleModel, current_energy: Energy, unplug_at: Energy) -> None:
        self.model = model
        self.current_energy = current_energy
        self.unplug_at = unplug_at

    @classmethod
    def at_soc(cls, model: VehicleModel, start: Percentage, unplug: Percentage) -> Vehicle:
        """Vehicle arriving at ``start`` that leaves once it reaches ``unplug``."""
        return cls(model, model.energy_at(start), model.energy_at(unplug))

    def __repr__(self) -> str:
        return (
            f"Vehicle({self.model.name!r}, current={self.current_energy}, "
            f"unplug_at={self.unplug_at})"
        )

    def _soc_of(self, energy: Energy) -> Percentage:
        if energy <= EMPTY_NOISE_FLOOR:
            return Percentage(0)
        return Percentage.from_fraction(energy.watt_hours / self.model.capacity.watt_hours)

    def state_of_charge(self) -> Percentage:
        return self._soc_of(self.current_energy)

    def unplug_state_of_charge(self) -> Percentage:
        return self._soc_of(self.unplug_at)

    def is_finished(self) -> bool:
        return self.current_energy >= self.unplug_at

    def next_power_request(self, offer: Power) -> Power | None:
        """Power this vehicle wants given ``offer``; ``None`` once it is done.

        The curve's power is capped at the offer, then lifted to the minimum
        charge rate.  The floor wins over the offer.
        """
        if self.is_finished():
            return None
        wanted = self.model.curve.power_at(self.state_of_charge())
        return max(min(wanted, offer), MIN_CHARGE_POWER)

    def charge(self, power: Power, dt: timedelta) -> Energy:
        """Charge at ``power`` for ``dt`` and return the energy added."""
        if power.watts < 0:
            raise NegativeChargePowerError(
                f"cannot charge {self.model.name!r} with negative power {power}"
            )
        added = power * dt
        self.current_energy = self.current_energy + added
        return added
