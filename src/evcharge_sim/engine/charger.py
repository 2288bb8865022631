"""Charger — splits a fixed grid connection across its occupied plugs.

Each tick ``update_allocations`` re-offers power to every connected vehicle
under the charger's load-sharing strategy and drops the vehicles that ask
to unplug.  Evaluation follows plug-in order, so traces are reproducible.

Granular bookkeeping (per tick):
  budget      = floor(grid / step)                   whole steps
  in_use      = Σ ceil(allocation / step)            over connected vehicles
  offer       = min(allocation + step, max_per_plug) if in_use < budget
              = allocation                           otherwise
  commit only if in_use − old_steps + new_steps ≤ budget

The allocation therefore climbs by at most one step per tick and never
overdraws the budget.  It converges over several ticks rather than solving
the split exactly in one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from evcharge_sim.config.charger import (
    ChargerConfig,
    ExclusiveStrategy,
    GranularStrategy,
    LoadSharingStrategy,
    PairedStrategy,
    SplitStrategy,
    check_granular_budget,
)
from evcharge_sim.engine.vehicle import Vehicle
from evcharge_sim.models.quantities import Energy, Power

logger = logging.getLogger(__name__)


def _div_up(numerator: int, denominator: int) -> int:
    """Integer division rounding up (non-negative numerators)."""
    return -(-numerator // denominator)


@dataclass
class ChargingVehicle:
    """A vehicle occupying a plug, with the power currently granted to it."""

    vehicle_id: int
    vehicle: Vehicle
    allocated_power: Power = Power(0)


class Charger:
    """A power source with a load-sharing policy over 1..N plugs."""

    def __init__(self, grid_connection: Power, strategy: LoadSharingStrategy | None = None) -> None:
        strategy = strategy if strategy is not None else ExclusiveStrategy()
        if isinstance(strategy, GranularStrategy):
            check_granular_budget(grid_connection.watts, Power.from_kw(strategy.power_step_kw).watts)
        self.grid_connection = grid_connection
        self.strategy = strategy
        self.charging: list[ChargingVehicle] = []

    @classmethod
    def from_config(cls, config: ChargerConfig) -> Charger:
        return cls(Power.from_kw(config.grid_connection_kw), config.strategy)

    def __repr__(self) -> str:
        return (
            f"Charger(grid={self.grid_connection}, strategy={self.strategy.kind}, "
            f"active={len(self.charging)}/{self.num_plugs()})"
        )

    # ── Plug bookkeeping ───────────────────────────────────────────────

    def num_plugs(self) -> int:
        return self.strategy.number_of_plugs

    def has_free_plug(self) -> bool:
        return len(self.charging) < self.num_plugs()

    def is_idle(self) -> bool:
        return not self.charging

    def add_vehicle(self, vehicle: Vehicle, vehicle_id: int) -> None:
        if not self.has_free_plug():
            raise ValueError(f"no free plug for vehicle {vehicle_id} on {self!r}")
        self.charging.append(ChargingVehicle(vehicle_id=vehicle_id, vehicle=vehicle))

    def total_allocated_power(self) -> Power:
        return sum((c.allocated_power for c in self.charging), Power(0))

    # ── Allocation ─────────────────────────────────────────────────────

    def update_allocations(self) -> list[int]:
        """Re-evaluate every plug under the strategy.

        Returns the ids of vehicles that unplugged this tick.
        """
        s = self.strategy
        if isinstance(s, GranularStrategy):
            departed = self._update_granular(s)
        else:
            offer = self._flat_offer(s)
            departed = []
            kept = []
            for c in self.charging:
                request = c.vehicle.next_power_request(offer)
                if request is None:
                    departed.append(c.vehicle_id)
                    continue
                c.allocated_power = request
                kept.append(c)
            self.charging = kept

        for vehicle_id in departed:
            logger.debug("vehicle %d unplugged from %r", vehicle_id, self)
        return departed

    def _flat_offer(self, s) -> Power:
        """Power offered to each plug under the non-granular strategies."""
        if isinstance(s, ExclusiveStrategy):
            return self.grid_connection
        per_plug = self.grid_connection / s.number_of_plugs
        if isinstance(s, PairedStrategy):
            free = s.number_of_plugs - len(self.charging)
            # more than half the plugs idle → every occupant can borrow a partner's share
            if free * 2 > s.number_of_plugs:
                return per_plug * 2
            return per_plug
        if isinstance(s, SplitStrategy):
            return per_plug
        raise TypeError(f"unknown load-sharing strategy {s!r}")

    def _update_granular(self, s: GranularStrategy) -> list[int]:
        step = Power.from_kw(s.power_step_kw)
        max_per_plug = Power.from_kw(s.max_per_plug_kw)
        total_steps = self.grid_connection.watts // step.watts
        steps_in_use = sum(_div_up(c.allocated_power.watts, step.watts) for c in self.charging)

        departed = []
        kept = []
        for c in self.charging:
            old_steps = _div_up(c.allocated_power.watts, step.watts)
            if total_steps - steps_in_use > 0:
                offer = min(c.allocated_power + step, max_per_plug)
            else:
                offer = c.allocated_power

            request = c.vehicle.next_power_request(offer)
            if request is None:
                # hand its steps back before the next plug is considered
                steps_in_use -= old_steps
                departed.append(c.vehicle_id)
                continue

            next_steps = steps_in_use - old_steps + _div_up(request.watts, step.watts)
            if next_steps <= total_steps:
                steps_in_use = next_steps
                c.allocated_power = request
            kept.append(c)

        self.charging = kept
        return departed

    # ── Charging ───────────────────────────────────────────────────────

    def charge_vehicles(self, dt: timedelta) -> Energy:
        """Advance every connected vehicle by ``dt``; return energy delivered."""
        return sum((c.vehicle.charge(c.allocated_power, dt) for c in self.charging), Energy(0.0))
