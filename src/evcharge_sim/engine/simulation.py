"""Simulation step loop — queue → plugs → allocation → charging → frame.

Each ``step()``:
  1. admit queued vehicles (FIFO) onto free plugs, chargers in list order
  2. every charger re-allocates, dropping vehicles that reached their threshold
  3. every remaining vehicle charges for ``step_duration`` at its allocation
  4. a frozen ``SimulationFrame`` is built and returned

The run is done once the queue is empty and every charger is idle.  Every
charging vehicle draws at least the 5 kW minimum, so any valid run with a
positive step duration terminates.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import timedelta
from typing import Iterable, Iterator

from evcharge_sim.engine.charger import Charger
from evcharge_sim.engine.vehicle import Vehicle
from evcharge_sim.errors import SimulationError
from evcharge_sim.models.quantities import Energy
from evcharge_sim.models.results import ChargerFrame, SimulationFrame, VehicleChargeFrame

logger = logging.getLogger(__name__)


class Simulation:
    """Orchestrates a waiting queue of vehicles over a set of chargers.

    Usage::

        sim = Simulation(chargers, step_duration=timedelta(seconds=60))
        handle = sim.enqueue(vehicle)
        frames = sim.run()
        sim.vehicle(handle).current_energy

    Vehicle handles are integers assigned at enqueue time, unique and
    increasing.  Admission is FIFO, so handle order is also plug-in order.
    """

    def __init__(
        self,
        chargers: Iterable[Charger],
        step_duration: timedelta,
        vehicles: Iterable[Vehicle] = (),
    ) -> None:
        if step_duration <= timedelta(0):
            raise ValueError(f"step_duration must be positive, got {step_duration}")
        self.chargers: list[Charger] = list(chargers)
        self.step_duration = step_duration
        self.elapsed = timedelta(0)
        self.total_energy_dispensed = Energy(0.0)
        self.steps_taken = 0

        self._queue: deque[int] = deque()
        self._vehicles: dict[int, Vehicle] = {}
        self._next_id = 0
        for v in vehicles:
            self.enqueue(v)

    # ── Queue & handles ────────────────────────────────────────────────

    def enqueue(self, vehicle: Vehicle) -> int:
        """Add a vehicle to the back of the queue and return its handle."""
        handle = self._next_id
        self._next_id += 1
        self._vehicles[handle] = vehicle
        self._queue.append(handle)
        return handle

    def vehicle(self, handle: int) -> Vehicle:
        return self._vehicles[handle]

    @property
    def vehicles(self) -> dict[int, Vehicle]:
        """Every vehicle ever enqueued, by handle."""
        return dict(self._vehicles)

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    # ── State ──────────────────────────────────────────────────────────

    def is_valid(self) -> bool:
        return bool(self.chargers) and bool(self._vehicles)

    def is_done(self) -> bool:
        return not self._queue and all(c.is_idle() for c in self.chargers)

    # ── Stepping ───────────────────────────────────────────────────────

    def _admit(self) -> None:
        for charger in self.chargers:
            while self._queue and charger.has_free_plug():
                handle = self._queue.popleft()
                charger.add_vehicle(self._vehicles[handle], handle)
                logger.debug("vehicle %d plugged into %r", handle, charger)
            if not self._queue:
                break

    def step(self) -> SimulationFrame:
        """Advance one ``step_duration``.  Raises ``SimulationError`` if not ``is_valid()``."""
        if not self.is_valid():
            raise SimulationError(
                f"cannot step an invalid simulation "
                f"({len(self.chargers)} chargers, {len(self._vehicles)} vehicles)"
            )
        self._admit()

        for charger in self.chargers:
            charger.update_allocations()

        dispensed = sum(
            (c.charge_vehicles(self.step_duration) for c in self.chargers),
            Energy(0.0),
        )
        self.elapsed += self.step_duration
        self.total_energy_dispensed += dispensed
        self.steps_taken += 1

        charger_frames = []
        vehicle_frames = []
        for charger_id, charger in enumerate(self.chargers):
            active = charger.total_allocated_power()
            charger_frames.append(ChargerFrame(
                charger_id=charger_id,
                active_power_w=active.watts,
                unused_power_w=(charger.grid_connection - active).watts,
            ))
            for c in charger.charging:
                vehicle_frames.append(VehicleChargeFrame(
                    vehicle_id=c.vehicle_id,
                    allocated_power_w=c.allocated_power.watts,
                    state_of_charge_pct=c.vehicle.state_of_charge().as_float(),
                ))

        return SimulationFrame(
            step=self.steps_taken,
            energy_dispensed_wh=dispensed.watt_hours,
            chargers=tuple(charger_frames),
            vehicles=tuple(vehicle_frames),
            elapsed_s=self.elapsed.total_seconds(),
        )

    def iter_frames(self) -> Iterator[SimulationFrame]:
        """Yield frames until done.  Stop iterating to cancel."""
        if not self.is_valid():
            return
        while not self.is_done():
            yield self.step()

    def run(self) -> tuple[SimulationFrame, ...]:
        """Run to completion.  An invalid simulation yields no frames."""
        if not self.is_valid():
            logger.info(
                "simulation not run: %d chargers, %d vehicles",
                len(self.chargers), len(self._vehicles),
            )
            return ()
        frames = tuple(self.iter_frames())
        logger.info(
            "simulation finished: %d steps, %s dispensed over %s",
            len(frames), self.total_energy_dispensed, self.elapsed,
        )
        return frames
