"""Ancillary per-student fees: annual, digital-resource (DCP), admission, custom.

None of these figures is ever discounted. Current-year totals use the
last-year fee values, projected totals the forecast values.
"""

from typing import List

from models.calculation import (
    AdditionalFees, CampusCalculation, CampusFeeBreakdown, CustomFeeTotal, FeeLine,
    HostelCalculation,
)
from models.settings import CustomFee, GlobalSettings
from engine.normalizer import normalize_custom_fee, normalize_settings
from engine.rates import apply_discount, change_percent


def calculate_custom_fee(
    fee: CustomFee,
    current_school_students: int,
    projected_school_students: int,
    hostel_students: int,
) -> CustomFeeTotal:
    """Apply one custom fee to the populations it is scoped to."""
    fee = normalize_custom_fee(fee)
    current_school = current_school_students * fee.last_year_amount if fee.applies_to_school else 0
    projected_school = projected_school_students * fee.amount if fee.applies_to_school else 0
    current_hostel = hostel_students * fee.last_year_amount if fee.applies_to_hostel else 0
    projected_hostel = hostel_students * fee.amount if fee.applies_to_hostel else 0

    return CustomFeeTotal(
        fee_id=fee.fee_id,
        name=fee.name,
        amount=fee.amount,
        applies_to_school=fee.applies_to_school,
        applies_to_hostel=fee.applies_to_hostel,
        current_school_total=current_school,
        current_hostel_total=current_hostel,
        projected_school_total=projected_school,
        projected_hostel_total=projected_hostel,
    )


def calculate_additional_fees(
    campus_calcs: List[CampusCalculation],
    hostel_calcs: List[HostelCalculation],
    settings: GlobalSettings,
) -> AdditionalFees:
    """System-wide ancillary fee totals for the current and projected year.

    - DCP: every school student, school population only.
    - Annual: school students at campuses where the annual fee applies,
      plus every hostel student at the hostel rate.
    - Admission: new-admission students only.
    - Custom: each fee scoped independently to school and/or hostel.
    """
    settings = normalize_settings(settings)

    current_school = sum(c.current_total_students for c in campus_calcs)
    projected_school = sum(c.projected_total_students for c in campus_calcs)
    current_annual_school = sum(c.current_total_students for c in campus_calcs if c.annual_fee_applicable)
    projected_annual_school = sum(c.projected_total_students for c in campus_calcs if c.annual_fee_applicable)
    current_new = sum(c.current_new_students for c in campus_calcs)
    projected_new = sum(c.projected_new_students for c in campus_calcs)
    # Occupancy is held fixed across both years
    hostel_students = sum(h.current_occupancy for h in hostel_calcs)

    custom = [
        calculate_custom_fee(fee, current_school, projected_school, hostel_students)
        for fee in settings.custom_fees
    ]

    return AdditionalFees(
        current_school_annual_fee=current_annual_school * settings.last_year_school_annual_fee,
        projected_school_annual_fee=projected_annual_school * settings.school_annual_fee,
        current_hostel_annual_fee=hostel_students * settings.last_year_hostel_annual_fee,
        projected_hostel_annual_fee=hostel_students * settings.hostel_annual_fee,
        current_dcp_total=current_school * settings.last_year_school_dcp,
        projected_dcp_total=projected_school * settings.school_dcp,
        current_admission_fee_total=current_new * settings.last_year_admission_fee,
        projected_admission_fee_total=projected_new * settings.admission_fee,
        current_custom_fee_total=sum(c.current_total for c in custom),
        projected_custom_fee_total=sum(c.projected_total for c in custom),
        custom_fees=custom,
    )


def calculate_campus_fee_breakdown(
    campus_calc: CampusCalculation,
    settings: GlobalSettings,
) -> CampusFeeBreakdown:
    """Tuition plus every school-side ancillary fee, scoped to one campus."""
    settings = normalize_settings(settings)
    current_students = campus_calc.current_total_students
    projected_students = campus_calc.projected_total_students

    lines = [
        FeeLine(
            "Renewal Tuition (net)",
            apply_discount(campus_calc.current_renewal_revenue, campus_calc.current_discount_rate),
            apply_discount(campus_calc.projected_renewal_revenue, campus_calc.projected_discount_rate),
        ),
        FeeLine(
            "New Admission Tuition (net)",
            apply_discount(campus_calc.current_new_revenue, campus_calc.current_discount_rate),
            apply_discount(campus_calc.projected_new_revenue, campus_calc.projected_discount_rate),
        ),
        FeeLine(
            "Admission Fee (new students)",
            campus_calc.current_admission_fee_revenue,
            campus_calc.projected_admission_fee_revenue,
        ),
    ]
    if campus_calc.annual_fee_applicable:
        lines.append(FeeLine(
            "Annual Fee",
            current_students * settings.last_year_school_annual_fee,
            projected_students * settings.school_annual_fee,
        ))
    lines.append(FeeLine(
        "DCP (all students)",
        current_students * settings.last_year_school_dcp,
        projected_students * settings.school_dcp,
    ))
    for fee in settings.custom_fees:
        if fee.applies_to_school:
            lines.append(FeeLine(
                fee.name,
                current_students * fee.last_year_amount,
                projected_students * fee.amount,
            ))

    current_total = sum(line.current for line in lines)
    projected_total = sum(line.projected for line in lines)

    return CampusFeeBreakdown(
        campus_id=campus_calc.campus_id,
        campus_name=campus_calc.campus_name,
        lines=lines,
        current_grand_total=current_total,
        projected_grand_total=projected_total,
        grand_total_change=projected_total - current_total,
        grand_total_change_percent=change_percent(current_total, projected_total),
    )
