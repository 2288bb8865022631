"""Tests for engine/curve.py — interpolation, averaging, sub-curves.

Covers:
  - Exact lookup at every stored sample (all catalog curves)
  - Linear interpolation between samples (hand-calculated)
  - Out-of-domain lookup raises a recoverable error
  - Trapezoidal average vs independent numeric integration
  - Sub-curve boundary consistency and preserved intermediate samples
  - Degenerate sub-curve windows
  - Malformed curves rejected at construction
"""

from __future__ import annotations

import numpy as np
import pytest

from evcharge_sim.config import VEHICLE_CATALOG
from evcharge_sim.engine.curve import ChargeCurve, CurvePoint
from evcharge_sim.errors import CurveDomainError, CurveError
from evcharge_sim.models.quantities import Percentage, Power


def pct(value: float) -> Percentage:
    return Percentage.from_float(value)


@pytest.fixture
def curve() -> ChargeCurve:
    """0 % → 100 kW, 50 % → 100 kW, 100 % → 20 kW."""
    return ChargeCurve.from_pairs([(0, 100), (50, 100), (100, 20)])


CATALOG_CURVES = [
    pytest.param(ChargeCurve.from_pairs(spec.charge_curve), id=spec.name)
    for spec in VEHICLE_CATALOG
]


# ═══════════════════════════════════════════════════════════════════════════
# power_at
# ═══════════════════════════════════════════════════════════════════════════

class TestPowerAt:

    @pytest.mark.parametrize("c", CATALOG_CURVES)
    def test_exact_at_every_sample(self, c: ChargeCurve):
        for point in c:
            assert c.power_at(point.state_of_charge) == point.power

    def test_flat_segment(self, curve: ChargeCurve):
        assert curve.power_at(pct(25)) == Power.from_kw(100)

    def test_interpolates_linearly(self, curve: ChargeCurve):
        # 100 kW − 80 kW × (75 − 50) / 50 = 60 kW
        assert curve.power_at(pct(75)) == Power.from_kw(60)
        # 100 kW − 80 kW × 10 / 50 = 84 kW
        assert curve.power_at(pct(60)) == Power.from_kw(84)

    def test_interpolation_on_catalog_curve(self):
        kia = ChargeCurve.from_pairs(VEHICLE_CATALOG[0].charge_curve)
        # between (2 %, 220 kW) and (45 %, 238 kW): 220 + 18 × 8 / 43
        expected = 220_000 + int(18_000 * 800 / 4_300)
        assert kia.power_at(pct(10)).watts == expected

    def test_below_domain_raises(self):
        partial = ChargeCurve.from_pairs([(10, 50), (90, 50)])
        with pytest.raises(CurveDomainError):
            partial.power_at(pct(5))

    def test_above_domain_raises(self):
        partial = ChargeCurve.from_pairs([(10, 50), (90, 50)])
        with pytest.raises(CurveDomainError) as exc:
            partial.power_at(pct(95))
        assert exc.value.soc == pct(95)
        assert "outside the curve range" in str(exc.value)

    def test_domain_error_is_a_value_error(self):
        partial = ChargeCurve.from_pairs([(10, 50), (90, 50)])
        with pytest.raises(ValueError):
            partial.power_at(pct(0))


# ═══════════════════════════════════════════════════════════════════════════
# average_power
# ═══════════════════════════════════════════════════════════════════════════

class TestAveragePower:

    def test_hand_calculated(self, curve: ChargeCurve):
        # (100 + 100)/2 × 0.5 + (100 + 20)/2 × 0.5 = 80 kW
        assert curve.average_power() == Power.from_kw(80)

    def test_constant_curve(self):
        assert ChargeCurve.from_pairs([(0, 55), (100, 55)]).average_power() == Power.from_kw(55)

    def test_partial_span_is_normalised(self):
        # 40–60 % at a flat 50 kW averages 50 kW, not 50 × 0.2
        assert ChargeCurve.from_pairs([(40, 50), (60, 50)]).average_power() == Power.from_kw(50)

    @pytest.mark.parametrize("c", CATALOG_CURVES)
    def test_matches_numeric_integration(self, c: ChargeCurve):
        socs = np.arange(0, Percentage.MAX + 1)
        watts = np.array([c.power_at(Percentage(int(s))).watts for s in socs], dtype=float)
        numeric = float(((watts[1:] + watts[:-1]) / 2).mean())
        # power_at truncates to whole watts at each sample
        assert c.average_power().watts == pytest.approx(numeric, abs=2.0)


# ═══════════════════════════════════════════════════════════════════════════
# sub_curve
# ═══════════════════════════════════════════════════════════════════════════

class TestSubCurve:

    def test_hand_calculated_window(self, curve: ChargeCurve):
        sub = curve.sub_curve(pct(10), pct(80))
        assert sub is not None
        assert [p.state_of_charge for p in sub] == [pct(10), pct(50), pct(80)]
        assert [p.power for p in sub] == [Power.from_kw(100), Power.from_kw(100), Power.from_kw(52)]
        # (100·0.4 + 76·0.3) / 0.7
        assert sub.average_power().watts == int((100_000 * 0.4 + 76_000 * 0.3) / 0.7)

    @pytest.mark.parametrize("c", CATALOG_CURVES)
    @pytest.mark.parametrize("start,end", [(10, 80), (0, 100), (2, 45), (33.33, 66.67), (99, 100)])
    def test_boundary_consistency(self, c: ChargeCurve, start: float, end: float):
        sub = c.sub_curve(pct(start), pct(end))
        assert sub is not None
        assert sub.power_at(pct(start)) == c.power_at(pct(start))
        assert sub.power_at(pct(end)) == c.power_at(pct(end))

    def test_keeps_intermediate_samples(self):
        kia = ChargeCurve.from_pairs(VEHICLE_CATALOG[0].charge_curve)
        sub = kia.sub_curve(pct(10), pct(80))
        inner = [p.state_of_charge.as_float() for p in sub.points[1:-1]]
        assert inner == [45.0, 50.0, 55.0, 60.0, 70.0, 77.0, 78.0]

    def test_window_on_sample_boundaries_has_no_duplicates(self, curve: ChargeCurve):
        sub = curve.sub_curve(pct(50), pct(100))
        assert [p.state_of_charge for p in sub] == [pct(50), pct(100)]

    def test_window_inside_one_segment(self, curve: ChargeCurve):
        sub = curve.sub_curve(pct(60), pct(70))
        assert len(sub) == 2

    def test_empty_or_reversed_window_is_none(self, curve: ChargeCurve):
        assert curve.sub_curve(pct(40), pct(40)) is None
        assert curve.sub_curve(pct(80), pct(10)) is None

    def test_bounds_outside_curve_are_none(self):
        partial = ChargeCurve.from_pairs([(10, 50), (90, 50)])
        assert partial.sub_curve(pct(5), pct(50)) is None
        assert partial.sub_curve(pct(20), pct(95)) is None

    def test_sub_curve_does_not_span_full_domain(self, curve: ChargeCurve):
        assert curve.spans_full_domain()
        assert not curve.sub_curve(pct(10), pct(80)).spans_full_domain()


# ═══════════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════════

class TestConstruction:

    def test_single_point_rejected(self):
        with pytest.raises(CurveError):
            ChargeCurve([CurvePoint.from_floats(0, 50)])

    def test_empty_rejected(self):
        with pytest.raises(CurveError):
            ChargeCurve([])

    def test_non_increasing_rejected(self):
        with pytest.raises(CurveError):
            ChargeCurve.from_pairs([(0, 50), (50, 60), (50, 70), (100, 10)])

    def test_equality(self):
        a = ChargeCurve.from_pairs([(0, 50), (100, 10)])
        b = ChargeCurve.from_pairs([(0, 50), (100, 10)])
        assert a == b
        assert len(a) == 2
