"""Charge curve — piecewise-linear SOC → charge power.

A curve is an ordered set of calibration samples.  Between two samples the
achievable power is interpolated linearly:

  power(soc) = a.power + (b.power − a.power) × (soc − a.soc) / (b.soc − a.soc)

Average power is the trapezoidal integral over the curve divided by the
span it covers, so a sub-curve (e.g. 10 % → 80 %) reports the mean power of
that window rather than of the whole battery.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from evcharge_sim.errors import CurveDomainError, CurveError
from evcharge_sim.models.quantities import Percentage, Power


@dataclass(frozen=True)
class CurvePoint:
    """One calibration sample of a vehicle's charging behaviour."""

    state_of_charge: Percentage
    power: Power

    @classmethod
    def from_floats(cls, percent: float, power_kw: float) -> CurvePoint:
        return cls(Percentage.from_float(percent), Power.from_kw(power_kw))


class ChargeCurve:
    """Immutable, strictly increasing sequence of at least two curve points.

    Raises ``CurveError`` on construction when the samples are malformed.
    Whether the curve spans the full 0 %–100 % domain is checked separately
    (``spans_full_domain``) because sub-curves legitimately do not.
    """

    __slots__ = ("_points", "_socs")

    def __init__(self, points: Iterable[CurvePoint]) -> None:
        pts = tuple(points)
        if len(pts) < 2:
            raise CurveError(f"a charge curve needs at least two points, got {len(pts)}")
        for a, b in zip(pts, pts[1:]):
            if not a.state_of_charge < b.state_of_charge:
                raise CurveError(
                    f"curve points must have strictly increasing state of charge "
                    f"({a.state_of_charge} is followed by {b.state_of_charge})"
                )
        self._points: tuple[CurvePoint, ...] = pts
        self._socs: tuple[int, ...] = tuple(p.state_of_charge.hundredths for p in pts)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[float]]) -> ChargeCurve:
        """Build from ``(soc_percent, power_kw)`` pairs."""
        return cls(CurvePoint.from_floats(soc, kw) for soc, kw in pairs)

    # ── Introspection ──────────────────────────────────────────────────

    @property
    def points(self) -> tuple[CurvePoint, ...]:
        return self._points

    @property
    def first(self) -> CurvePoint:
        return self._points[0]

    @property
    def last(self) -> CurvePoint:
        return self._points[-1]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[CurvePoint]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChargeCurve):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        inner = ", ".join(f"({p.state_of_charge}, {p.power})" for p in self._points)
        return f"ChargeCurve([{inner}])"

    def spans_full_domain(self) -> bool:
        return self._socs[0] == 0 and self._socs[-1] == Percentage.MAX

    # ── Curve maths ────────────────────────────────────────────────────

    def power_at(self, soc: Percentage) -> Power:
        """Achievable power at ``soc`` — exact sample or linear interpolation.

        Raises ``CurveDomainError`` when ``soc`` lies outside the curve.
        """
        target = soc.hundredths
        idx = bisect_left(self._socs, target)
        if idx < len(self._socs) and self._socs[idx] == target:
            return self._points[idx].power
        if idx == 0 or idx == len(self._socs):
            raise CurveDomainError(soc, self.first.state_of_charge, self.last.state_of_charge)

        a = self._points[idx - 1]
        b = self._points[idx]
        span = self._socs[idx] - self._socs[idx - 1]
        offset = target - self._socs[idx - 1]
        delta = (b.power.watts - a.power.watts) * offset / span
        return a.power + Power(int(delta))

    def average_power(self) -> Power:
        """Trapezoidal mean power over the span this curve covers."""
        area = 0.0
        for a, b in zip(self._points, self._points[1:]):
            width = b.state_of_charge.as_fraction() - a.state_of_charge.as_fraction()
            area += (a.power.watts + b.power.watts) / 2 * width
        span = self.last.state_of_charge.as_fraction() - self.first.state_of_charge.as_fraction()
        return Power(int(area / span))

    def sub_curve(self, start: Percentage, end: Percentage) -> ChargeCurve | None:
        """Portion of the curve between ``start`` and ``end``.

        End points are interpolated, every sample strictly between them is
        kept.  Returns ``None`` when either bound has no bracketing interval
        or the window is empty.
        """
        if not start < end:
            return None

        start_edge = None
        for i in range(len(self._socs) - 1):
            if self._socs[i] <= start.hundredths < self._socs[i + 1]:
                start_edge = i + 1
                break
        end_edge = None
        for j in range(len(self._socs) - 1):
            if self._socs[j] < end.hundredths <= self._socs[j + 1]:
                end_edge = j
                break
        if start_edge is None or end_edge is None:
            return None

        middle = self._points[start_edge:end_edge + 1]
        return ChargeCurve((
            CurvePoint(start, self.power_at(start)),
            *middle,
            CurvePoint(end, self.power_at(end)),
        ))
