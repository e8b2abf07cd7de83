"""Tests for campus-level aggregation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.campus import CampusData, ClassData
from models.settings import GlobalSettings
from engine.campus_engine import (
    calculate_all_campuses, calculate_campus_revenue, calculate_class_breakdown,
    over_capacity_campuses, top_campuses,
)


def make_class(name="Grade 5", renewal=70, renewal_fee=300000, new=30, new_fee=350000, **kwargs):
    return ClassData(name, renewal, renewal_fee, new, new_fee, **kwargs)


def make_campus(campus_id="C1", capacity=120, discount=10, classes=None, **kwargs):
    return CampusData(
        campus_id, f"Campus {campus_id}", campus_id, capacity,
        discount_rate=discount,
        classes=classes if classes is not None else [make_class()],
        **kwargs,
    )


def make_settings(**kwargs):
    defaults = {"fee_hike": 5, "student_growth": 8}
    defaults.update(kwargs)
    return GlobalSettings(**defaults)


class TestCalculateCampusRevenue:
    def test_worked_example(self):
        calc = calculate_campus_revenue(make_campus(), make_settings())

        assert calc.current_gross_revenue == 31_500_000
        assert calc.current_net_revenue == pytest.approx(28_350_000)
        assert calc.projected_renewal_students == 76
        assert calc.projected_new_students == 32
        assert calc.projected_gross_revenue == pytest.approx(35_700_000)
        assert calc.projected_net_revenue == pytest.approx(32_130_000)
        assert calc.revenue_change == pytest.approx(3_780_000)
        assert calc.revenue_change_percent == pytest.approx(3_780_000 / 28_350_000 * 100)

    def test_discount_amounts(self):
        calc = calculate_campus_revenue(make_campus(), make_settings())
        assert calc.current_discount_amount == pytest.approx(3_150_000)
        assert calc.projected_discount_amount == pytest.approx(3_570_000)

    def test_last_year_discount_drives_current_year(self):
        campus = make_campus(last_year_discount=5)
        calc = calculate_campus_revenue(campus, make_settings())
        assert calc.current_discount_rate == 5
        assert calc.projected_discount_rate == 10
        assert calc.current_net_revenue == pytest.approx(29_925_000)
        assert calc.projected_net_revenue == pytest.approx(32_130_000)

    def test_campus_totals_match_class_sums(self):
        classes = [make_class("A", 25, 200000, 5, 250000), make_class("B", 33, 210000, 7, 260000)]
        calc = calculate_campus_revenue(make_campus(classes=classes), make_settings())

        assert calc.projected_total_students == sum(c.projected_total_students for c in calc.classes)
        assert calc.projected_gross_revenue == pytest.approx(
            sum(c.projected_gross_revenue for c in calc.classes))
        assert calc.projected_net_revenue == pytest.approx(sum(c.projected_revenue for c in calc.classes))

    def test_zero_rates_property(self):
        classes = [make_class("A", 17, 123456.5, 3, 99999.9), make_class("B", 41, 210000, 9, 260000)]
        calc = calculate_campus_revenue(make_campus(classes=classes), GlobalSettings())
        assert calc.projected_total_students == calc.current_total_students
        assert calc.projected_net_revenue == calc.current_net_revenue

    def test_campus_local_rates_add_to_global(self):
        campus = make_campus(new_student_growth=2, discount=0)
        calc = calculate_campus_revenue(campus, make_settings(fee_hike=0))
        assert calc.rates.new_student_growth == 10
        assert calc.projected_new_students == 33

    def test_admission_fee_revenue(self):
        settings = make_settings(admission_fee=25000, last_year_admission_fee=20000)
        calc = calculate_campus_revenue(make_campus(), settings)
        assert calc.current_admission_fee_revenue == 30 * 20000
        assert calc.projected_admission_fee_revenue == 32 * 25000

    def test_higher_discount_lowers_net_only(self):
        calcs = [
            calculate_campus_revenue(make_campus(discount=d), make_settings())
            for d in (0, 5, 10, 20)
        ]
        nets = [c.projected_net_revenue for c in calcs]
        assert all(a > b for a, b in zip(nets, nets[1:]))
        assert {c.projected_gross_revenue for c in calcs} == {calcs[0].projected_gross_revenue}
        assert nets[0] == pytest.approx(calcs[0].projected_gross_revenue)

    def test_current_headcounts_match_inputs(self):
        classes = [make_class("A", 25, 200000, 5, 250000), make_class("B", 33, 210000, 7, 260000)]
        campus = make_campus(classes=classes)
        calc = calculate_campus_revenue(campus, make_settings())

        assert calc.current_total_students == campus.current_total_students == 70
        assert [c.current_total_students for c in calc.classes] == [cls.total_students for cls in classes]


class TestCapacity:
    def test_within_capacity(self):
        calc = calculate_campus_revenue(make_campus(capacity=120), make_settings())
        assert not calc.is_over_capacity
        assert calc.capacity_utilization == pytest.approx(90.0)

    def test_over_capacity(self):
        calc = calculate_campus_revenue(make_campus(capacity=100), make_settings())
        assert calc.is_over_capacity
        assert calc.capacity_utilization == pytest.approx(108.0)

    def test_exactly_at_capacity_is_not_over(self):
        calc = calculate_campus_revenue(make_campus(capacity=108), make_settings())
        assert calc.projected_total_students == 108
        assert not calc.is_over_capacity
        assert calc.capacity_utilization == pytest.approx(100.0)

    def test_zero_capacity_is_flagged_not_infinite(self):
        calc = calculate_campus_revenue(make_campus(capacity=0), make_settings())
        assert not calc.capacity_defined
        assert calc.capacity_utilization == 0.0


class TestClassBreakdown:
    def test_inactive_classes_hidden_by_default(self):
        classes = [make_class(), make_class("Empty", 0, 0, 0, 0)]
        campus = make_campus(classes=classes)

        visible = calculate_class_breakdown(campus, make_settings())
        everything = calculate_class_breakdown(campus, make_settings(), include_inactive=True)

        assert [c.class_name for c in visible] == ["Grade 5"]
        assert len(everything) == 2

    def test_campus_without_classes(self):
        calc = calculate_campus_revenue(make_campus(classes=[]), make_settings())
        assert calc.projected_total_students == 0
        assert calc.revenue_change_percent == 0.0


class TestRankings:
    def test_top_campuses_sorted_by_projected_net(self):
        campuses = [
            make_campus("S", classes=[make_class(renewal=10, new=0)]),
            make_campus("L", classes=[make_class(renewal=90, new=0)]),
            make_campus("M", classes=[make_class(renewal=50, new=0)]),
        ]
        calcs = calculate_all_campuses(campuses, make_settings())

        assert [c.campus_id for c in top_campuses(calcs)] == ["L", "M", "S"]
        assert [c.campus_id for c in top_campuses(calcs, limit=1)] == ["L"]

    def test_over_capacity_campuses(self):
        campuses = [make_campus("A", capacity=100), make_campus("B", capacity=500)]
        calcs = calculate_all_campuses(campuses, make_settings())
        assert [c.campus_id for c in over_capacity_campuses(calcs)] == ["A"]


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
