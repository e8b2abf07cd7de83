"""Generates human-readable explanations for revenue projections."""

from typing import List

from models.calculation import CampusCalculation, PopulationProjection
from models.settings import GlobalSettings
from engine.rates import apply_discount, round_half_up, to_multiplier


def _population_step(label: str, pop: PopulationProjection, growth: float, hike: float) -> str:
    if pop.is_overridden:
        count_text = f"{pop.current_count} -> {pop.projected_count} students (forecast override)"
    else:
        count_text = (
            f"{pop.current_count} x {to_multiplier(growth):.2f} "
            f"=> {pop.projected_count} students"
        )
    return (
        f"{label}: {count_text}; fee {pop.current_fee:,.0f} x {to_multiplier(hike):.2f} "
        f"= {pop.projected_fee:,.0f}"
    )


def explain_campus_projection(calc: CampusCalculation) -> List[str]:
    """Produce a step-by-step explanation of how a campus forecast was built."""
    rates = calc.rates
    steps = []

    steps.append(
        f"Step 1 - Effective rates: renewal growth {rates.renewal_growth:+.1f}%, "
        f"new-student growth {rates.new_student_growth:+.1f}%, "
        f"renewal fee hike {rates.renewal_fee_hike:+.1f}%, "
        f"new-admission fee hike {rates.new_admission_fee_hike:+.1f}% "
        f"(campus value + global adjustment)"
    )

    for cls in calc.active_classes:
        steps.append(f"Class {cls.class_name}:")
        steps.append("  " + _population_step(
            "Renewal", cls.renewal, rates.renewal_growth, rates.renewal_fee_hike))
        steps.append("  " + _population_step(
            "New admission", cls.new_admission, rates.new_student_growth, rates.new_admission_fee_hike))

    steps.append(
        f"Step 2 - Gross tuition: renewal {calc.projected_renewal_revenue:,.0f} + "
        f"new {calc.projected_new_revenue:,.0f} = {calc.projected_gross_revenue:,.0f} "
        f"(current {calc.current_gross_revenue:,.0f})"
    )

    steps.append(
        f"Step 3 - Discount: {calc.projected_gross_revenue:,.0f} less {calc.projected_discount_rate:.1f}% "
        f"= {calc.projected_net_revenue:,.0f} net "
        f"(current year used last year's {calc.current_discount_rate:.1f}% => {calc.current_net_revenue:,.0f})"
    )

    steps.append(
        f"Step 4 - Change: {calc.revenue_change:+,.0f} ({calc.revenue_change_percent:+.1f}%)"
    )

    if not calc.capacity_defined:
        steps.append("Note: No capacity set for this campus, utilization not tracked")
    elif calc.is_over_capacity:
        steps.append(
            f"Note: Projected {calc.projected_total_students} students exceeds capacity "
            f"{calc.max_capacity} ({calc.capacity_utilization:.1f}%)"
        )

    return steps


def explain_fee_formula(
    settings: GlobalSettings,
    example_fee: float = 300000,
    example_students: int = 100,
) -> List[str]:
    """Walk a sample class through the global hike, growth and discount."""
    hike = settings.fee_hike
    growth = settings.student_growth
    discount = settings.global_discount

    new_fee = example_fee * to_multiplier(hike)
    new_students = round_half_up(example_students * to_multiplier(growth))
    gross = new_fee * new_students
    net = apply_discount(gross, discount)

    return [
        f"New Fee = Base Fee x (1 + Fee Hike%) = {example_fee:,.0f} x {to_multiplier(hike):.2f} "
        f"= {new_fee:,.0f}",
        f"Projected Students = Current x (1 + Growth%) = {example_students} x "
        f"{to_multiplier(growth):.2f} => {new_students}",
        f"Gross Revenue = New Fee x Projected Students = {gross:,.0f}",
        f"Net Revenue = Gross x (1 - Discount%) = {gross:,.0f} x {1 - discount / 100:.2f} "
        f"= {net:,.0f}",
    ]
