"""Error taxonomy for the charging simulator.

Everything here is recoverable by the caller: a malformed vehicle spec or
an upstream logic defect is reported, never turned into a process abort.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for every engine error."""


class CurveError(SimulationError, ValueError):
    """A charge curve is malformed (too few points, unordered, bad span)."""


class CurveDomainError(CurveError):
    """A state of charge outside the curve's defined range was looked up."""

    def __init__(self, soc, first, last) -> None:
        super().__init__(f"state of charge {soc} is outside the curve range [{first}, {last}]")
        self.soc = soc
        self.first = first
        self.last = last


class NegativeChargePowerError(SimulationError, ValueError):
    """Charging was requested with negative power."""


class VehicleLookupError(SimulationError, KeyError):
    """No vehicle spec with the given name exists in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unable to find vehicle by name {self.name!r}"
