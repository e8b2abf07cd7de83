"""Campus-level aggregation: sum class projections, discount once, flag capacity."""

from typing import List

from models.campus import CampusData
from models.calculation import CampusCalculation, ClassCalculation
from models.settings import GlobalSettings
from engine.class_projector import project_class
from engine.normalizer import normalize_campus, normalize_settings
from engine.rates import apply_discount, change_percent, resolve_campus_rates, safe_percent
from config.defaults import TOP_CAMPUS_COUNT


def calculate_campus_revenue(
    campus: CampusData,
    settings: GlobalSettings,
) -> CampusCalculation:
    """Project every class of a campus and aggregate to campus totals.

    Renewal and new-admission tuition are summed separately across classes,
    then the campus discount is applied once to the combined gross: the
    last-year discount to the current year, the forecast discount to the
    projected year. Projected headcounts are the sum of per-class projected
    counts, so campus and class views always agree.
    """
    campus = normalize_campus(campus)
    settings = normalize_settings(settings)
    rates = resolve_campus_rates(campus, settings)

    classes = [
        project_class(cls, rates, campus.discount_rate, campus.last_year_discount)
        for cls in campus.classes
    ]

    current_renewal_students = sum(c.renewal.current_count for c in classes)
    current_new_students = sum(c.new_admission.current_count for c in classes)
    projected_renewal_students = sum(c.renewal.projected_count for c in classes)
    projected_new_students = sum(c.new_admission.projected_count for c in classes)

    current_renewal_revenue = sum(c.renewal.current_revenue for c in classes)
    current_new_revenue = sum(c.new_admission.current_revenue for c in classes)
    projected_renewal_revenue = sum(c.renewal.projected_revenue for c in classes)
    projected_new_revenue = sum(c.new_admission.projected_revenue for c in classes)

    current_gross = current_renewal_revenue + current_new_revenue
    projected_gross = projected_renewal_revenue + projected_new_revenue
    current_net = apply_discount(current_gross, campus.last_year_discount)
    projected_net = apply_discount(projected_gross, campus.discount_rate)

    projected_total = projected_renewal_students + projected_new_students

    return CampusCalculation(
        campus_id=campus.campus_id,
        campus_name=campus.name,
        short_name=campus.short_name,
        current_renewal_students=current_renewal_students,
        current_new_students=current_new_students,
        current_total_students=campus.current_total_students,
        projected_renewal_students=projected_renewal_students,
        projected_new_students=projected_new_students,
        projected_total_students=projected_total,
        current_renewal_revenue=current_renewal_revenue,
        current_new_revenue=current_new_revenue,
        current_gross_revenue=current_gross,
        current_net_revenue=current_net,
        projected_renewal_revenue=projected_renewal_revenue,
        projected_new_revenue=projected_new_revenue,
        projected_gross_revenue=projected_gross,
        projected_net_revenue=projected_net,
        current_discount_rate=campus.last_year_discount,
        projected_discount_rate=campus.discount_rate,
        current_discount_amount=current_gross - current_net,
        projected_discount_amount=projected_gross - projected_net,
        revenue_change=projected_net - current_net,
        revenue_change_percent=change_percent(current_net, projected_net),
        max_capacity=campus.max_capacity,
        is_over_capacity=projected_total > campus.max_capacity,
        capacity_utilization=safe_percent(projected_total, campus.max_capacity),
        capacity_defined=campus.max_capacity != 0,
        annual_fee_applicable=campus.annual_fee_applicable,
        current_admission_fee_revenue=current_new_students * settings.last_year_admission_fee,
        projected_admission_fee_revenue=projected_new_students * settings.admission_fee,
        rates=rates,
        classes=classes,
    )


def calculate_class_breakdown(
    campus: CampusData,
    settings: GlobalSettings,
    include_inactive: bool = False,
) -> List[ClassCalculation]:
    """Per-class figures for one campus, inactive classes dropped by default."""
    calc = calculate_campus_revenue(campus, settings)
    if include_inactive:
        return calc.classes
    return calc.active_classes


def calculate_all_campuses(
    campuses: List[CampusData],
    settings: GlobalSettings,
) -> List[CampusCalculation]:
    return [calculate_campus_revenue(c, settings) for c in campuses]


def top_campuses(
    calcs: List[CampusCalculation],
    limit: int = TOP_CAMPUS_COUNT,
) -> List[CampusCalculation]:
    """Campuses ranked by projected net tuition revenue."""
    return sorted(calcs, key=lambda c: c.projected_net_revenue, reverse=True)[:limit]


def over_capacity_campuses(calcs: List[CampusCalculation]) -> List[CampusCalculation]:
    return [c for c in calcs if c.is_over_capacity]
