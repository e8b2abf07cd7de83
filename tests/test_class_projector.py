"""Tests for the per-class projector."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.campus import ClassData
from models.calculation import CampusRates
from engine.class_projector import is_active_class, project_class, project_population


def make_class(name="Grade 5", renewal=70, renewal_fee=300000, new=30, new_fee=350000, **kwargs):
    return ClassData(name, renewal, renewal_fee, new, new_fee, **kwargs)


def make_rates(hike=5, growth=8):
    return CampusRates(
        renewal_fee_hike=hike, new_admission_fee_hike=hike,
        renewal_growth=growth, new_student_growth=growth,
    )


class TestProjectPopulation:
    def test_growth_and_hike(self):
        pop = project_population(70, 300000, growth_rate=8, fee_hike_rate=5)
        assert pop.projected_count == 76
        assert pop.projected_fee == pytest.approx(315000)
        assert pop.projected_revenue == pytest.approx(76 * 315000)
        assert pop.current_revenue == 21_000_000
        assert not pop.is_overridden

    def test_override_replaces_formula(self):
        pop = project_population(70, 300000, growth_rate=8, fee_hike_rate=5, override=60)
        assert pop.projected_count == 60
        assert pop.is_overridden
        assert pop.projected_revenue == pytest.approx(60 * 315000)

    def test_zero_override_is_respected(self):
        pop = project_population(70, 300000, growth_rate=8, fee_hike_rate=0, override=0)
        assert pop.projected_count == 0
        assert pop.projected_revenue == 0

    def test_zero_rates_leave_revenue_unchanged(self):
        pop = project_population(33, 123456.7, growth_rate=0, fee_hike_rate=0)
        assert pop.projected_count == 33
        assert pop.projected_revenue == pop.current_revenue

    def test_negative_growth(self):
        pop = project_population(50, 1000, growth_rate=-10, fee_hike_rate=0)
        assert pop.projected_count == 45


class TestIsActiveClass:
    def test_empty_class_is_inactive(self):
        assert not is_active_class(make_class(renewal=0, renewal_fee=0, new=0))

    def test_fee_without_students_is_active(self):
        assert is_active_class(make_class(renewal=0, new=0))

    def test_new_students_only_is_active(self):
        assert is_active_class(make_class(renewal=0, renewal_fee=0, new=5))


class TestProjectClass:
    def test_discount_applied_once(self):
        calc = project_class(make_class(), make_rates(), discount_rate=10, last_year_discount=10)

        assert calc.current_gross_revenue == 31_500_000
        assert calc.current_revenue == pytest.approx(28_350_000)
        assert calc.projected_gross_revenue == pytest.approx(35_700_000)
        assert calc.projected_revenue == pytest.approx(32_130_000)
        assert calc.revenue_change == pytest.approx(3_780_000)
        assert calc.projected_total_students == 108

    def test_current_year_uses_last_year_discount(self):
        calc = project_class(make_class(), make_rates(0, 0), discount_rate=20, last_year_discount=10)
        assert calc.current_revenue == pytest.approx(28_350_000)
        assert calc.projected_revenue == pytest.approx(25_200_000)

    def test_forecast_overrides_per_population(self):
        cls = make_class(forecast_renewal_count=80)
        calc = project_class(cls, make_rates(), discount_rate=0, last_year_discount=0)
        assert calc.renewal.projected_count == 80
        assert calc.renewal.is_overridden
        assert calc.new_admission.projected_count == 32
        assert not calc.new_admission.is_overridden

    def test_inactive_class_flagged(self):
        calc = project_class(make_class(renewal=0, renewal_fee=0, new=0), make_rates(), 10, 10)
        assert not calc.is_active
        assert calc.projected_revenue == 0
        assert calc.revenue_change_percent == 0.0


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
