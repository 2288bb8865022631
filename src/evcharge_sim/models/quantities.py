"""Quantity types — Percentage, Power, Energy.

Power is held in whole watts so allocation arithmetic stays exact over
thousands of steps.  Energy only accumulates and never feeds back into
allocation decisions, so it is a plain float of watt-hours.  Percentage is
a fixed-precision count of hundredths of a percent (0 … 10_000).

Conversions between the three are explicit:
  Power × timedelta    → Energy
  Energy ÷ Power       → timedelta
  Percentage × Energy  → Energy
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

_SECONDS_PER_HOUR = 3_600.0


# ═══════════════════════════════════════════════════════════════════════════
# Percentage
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, order=True)
class Percentage:
    """A state-of-charge style ratio, clamped to 0 %–100 %.

    ``hundredths`` is the raw fixed-point value: 10_000 == 100.00 %.
    Construction never raises; out-of-range inputs saturate.
    """

    hundredths: int = 0

    PRECISION = 100
    MAX = 10_000

    def __post_init__(self) -> None:
        clamped = min(max(int(self.hundredths), 0), self.MAX)
        object.__setattr__(self, "hundredths", clamped)

    @classmethod
    def from_float(cls, percent: float) -> Percentage:
        """Build from a 0.0–100.0 value (e.g. ``Percentage.from_float(80)``)."""
        return cls(round(percent * cls.PRECISION))

    @classmethod
    def from_fraction(cls, fraction: float) -> Percentage:
        """Build from a 0.0–1.0 value."""
        return cls.from_float(fraction * 100.0)

    def as_float(self) -> float:
        """0.0 → 100.0"""
        return self.hundredths / self.PRECISION

    def as_fraction(self) -> float:
        """0.0 → 1.0"""
        return self.hundredths / self.MAX

    def __sub__(self, other: Percentage) -> Percentage:
        if not isinstance(other, Percentage):
            return NotImplemented
        return Percentage(self.hundredths - other.hundredths)

    def __mul__(self, other: Energy) -> Energy:
        if not isinstance(other, Energy):
            return NotImplemented
        return Energy(other.watt_hours * self.as_fraction())

    def __str__(self) -> str:
        return f"{self.as_float():.2f}%"


# ═══════════════════════════════════════════════════════════════════════════
# Power
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, order=True)
class Power:
    """Signed power in whole watts."""

    watts: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "watts", int(self.watts))

    @classmethod
    def from_kw(cls, kilowatts: float) -> Power:
        return cls(int(kilowatts * 1_000))

    def as_kw(self) -> float:
        return self.watts / 1_000

    def __add__(self, other: Power) -> Power:
        if not isinstance(other, Power):
            return NotImplemented
        return Power(self.watts + other.watts)

    def __radd__(self, other):
        # lets sum() work with its default start of 0
        if other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: Power) -> Power:
        if not isinstance(other, Power):
            return NotImplemented
        return Power(self.watts - other.watts)

    def __neg__(self) -> Power:
        return Power(-self.watts)

    def __mul__(self, other):
        if isinstance(other, timedelta):
            hours = other.total_seconds() / _SECONDS_PER_HOUR
            return Energy(self.watts * hours)
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return Power(int(self.watts * other))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, int) and not isinstance(other, bool):
            return Power(_div_trunc(self.watts, other))
        if isinstance(other, float):
            return Power(int(self.watts / other))
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.as_kw():.1f} kW"


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


# ═══════════════════════════════════════════════════════════════════════════
# Energy
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, order=True)
class Energy:
    """Energy in watt-hours."""

    watt_hours: float = 0.0

    @classmethod
    def from_kwh(cls, kilowatt_hours: float) -> Energy:
        return cls(kilowatt_hours * 1_000.0)

    def as_kwh(self) -> float:
        return self.watt_hours / 1_000.0

    def __add__(self, other: Energy) -> Energy:
        if not isinstance(other, Energy):
            return NotImplemented
        return Energy(self.watt_hours + other.watt_hours)

    def __radd__(self, other):
        if other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: Energy) -> Energy:
        if not isinstance(other, Energy):
            return NotImplemented
        return Energy(self.watt_hours - other.watt_hours)

    def __truediv__(self, other: Power) -> timedelta:
        if not isinstance(other, Power):
            return NotImplemented
        if other.watts <= 0:
            return timedelta(0)
        hours = self.watt_hours / other.watts
        return timedelta(seconds=hours * _SECONDS_PER_HOUR)

    def __str__(self) -> str:
        return f"{self.as_kwh():.1f} kWh"
