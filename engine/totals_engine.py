"""System-wide totals across campuses, hostels and ancillary fees."""

from typing import List

from models.calculation import CampusCalculation, HostelCalculation, TotalCalculation
from models.settings import GlobalSettings
from engine.fees_engine import calculate_additional_fees
from engine.rates import change_percent


def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def calculate_totals(
    campus_calcs: List[CampusCalculation],
    hostel_calcs: List[HostelCalculation],
    settings: GlobalSettings,
) -> TotalCalculation:
    """Combine campus, hostel and additional-fee outputs.

    Tuition total = campus net tuition + hostel revenue. Grand total =
    tuition total + annual + DCP + admission + custom fees (none discounted).
    Discount rates are averaged per campus, unweighted.
    """
    fees = calculate_additional_fees(campus_calcs, hostel_calcs, settings)

    current_school_students = sum(c.current_total_students for c in campus_calcs)
    projected_school_students = sum(c.projected_total_students for c in campus_calcs)

    current_school_revenue = sum(c.current_net_revenue for c in campus_calcs)
    projected_school_revenue = sum(c.projected_net_revenue for c in campus_calcs)
    current_hostel_revenue = sum(h.current_revenue for h in hostel_calcs)
    projected_hostel_revenue = sum(h.projected_revenue for h in hostel_calcs)

    current_tuition = current_school_revenue + current_hostel_revenue
    projected_tuition = projected_school_revenue + projected_hostel_revenue

    current_gross = sum(c.current_gross_revenue for c in campus_calcs)
    projected_gross = sum(c.projected_gross_revenue for c in campus_calcs)

    current_grand_total = current_tuition + fees.current_total
    projected_grand_total = projected_tuition + fees.projected_total

    return TotalCalculation(
        campus_count=len(campus_calcs),
        hostel_count=len(hostel_calcs),
        over_capacity_count=sum(1 for c in campus_calcs if c.is_over_capacity),
        current_school_students=current_school_students,
        projected_school_students=projected_school_students,
        current_renewal_students=sum(c.current_renewal_students for c in campus_calcs),
        projected_renewal_students=sum(c.projected_renewal_students for c in campus_calcs),
        current_new_students=sum(c.current_new_students for c in campus_calcs),
        projected_new_students=sum(c.projected_new_students for c in campus_calcs),
        hostel_students=sum(h.current_occupancy for h in hostel_calcs),
        student_growth_percent=change_percent(current_school_students, projected_school_students),
        current_school_revenue=current_school_revenue,
        projected_school_revenue=projected_school_revenue,
        current_hostel_revenue=current_hostel_revenue,
        projected_hostel_revenue=projected_hostel_revenue,
        current_tuition_revenue=current_tuition,
        projected_tuition_revenue=projected_tuition,
        tuition_change=projected_tuition - current_tuition,
        tuition_change_percent=change_percent(current_tuition, projected_tuition),
        current_gross_revenue=current_gross,
        projected_gross_revenue=projected_gross,
        current_discount_amount=current_gross - current_school_revenue,
        projected_discount_amount=projected_gross - projected_school_revenue,
        average_current_discount_rate=_average([c.current_discount_rate for c in campus_calcs]),
        average_projected_discount_rate=_average([c.projected_discount_rate for c in campus_calcs]),
        additional_fees=fees,
        current_grand_total=current_grand_total,
        projected_grand_total=projected_grand_total,
        grand_total_change=projected_grand_total - current_grand_total,
        grand_total_change_percent=change_percent(current_grand_total, projected_grand_total),
    )
