"""Per-class projection of renewal and new-admission populations."""

from typing import Optional

from models.campus import ClassData
from models.calculation import CampusRates, ClassCalculation, PopulationProjection
from engine.rates import apply_discount, change_percent, round_half_up, to_multiplier


def project_population(
    current_count: int,
    current_fee: float,
    growth_rate: float,
    fee_hike_rate: float,
    override: Optional[int] = None,
) -> PopulationProjection:
    """Project one population (renewal or new admission) of a class.

    Counts: the explicit override when given, else current count grown by
    growth_rate and rounded. Fee: current fee hiked by fee_hike_rate, kept
    unrounded so every aggregation level sums the same figures; round it
    only for display.
    """
    if override is not None:
        projected_count = override
    else:
        projected_count = round_half_up(current_count * to_multiplier(growth_rate))
    projected_fee = current_fee * to_multiplier(fee_hike_rate)

    return PopulationProjection(
        current_count=current_count,
        current_fee=current_fee,
        current_revenue=current_count * current_fee,
        projected_count=projected_count,
        projected_fee=projected_fee,
        projected_revenue=projected_count * projected_fee,
        is_overridden=override is not None,
    )


def is_active_class(cls: ClassData) -> bool:
    """Inactive = no renewals, no new admissions and no renewal fee."""
    return not (cls.renewal_count == 0 and cls.new_admission_count == 0 and cls.renewal_fee == 0)


def project_class(
    cls: ClassData,
    rates: CampusRates,
    discount_rate: float,
    last_year_discount: float,
) -> ClassCalculation:
    """Project a class and apply the campus discount once to its gross tuition."""
    renewal = project_population(
        cls.renewal_count, cls.renewal_fee,
        rates.renewal_growth, rates.renewal_fee_hike,
        cls.forecast_renewal_count,
    )
    new_admission = project_population(
        cls.new_admission_count, cls.new_admission_fee,
        rates.new_student_growth, rates.new_admission_fee_hike,
        cls.forecast_new_admission_count,
    )

    current_gross = renewal.current_revenue + new_admission.current_revenue
    projected_gross = renewal.projected_revenue + new_admission.projected_revenue
    current_net = apply_discount(current_gross, last_year_discount)
    projected_net = apply_discount(projected_gross, discount_rate)

    return ClassCalculation(
        class_name=cls.class_name,
        renewal=renewal,
        new_admission=new_admission,
        current_total_students=cls.total_students,
        projected_total_students=renewal.projected_count + new_admission.projected_count,
        current_gross_revenue=current_gross,
        projected_gross_revenue=projected_gross,
        current_revenue=current_net,
        projected_revenue=projected_net,
        revenue_change=projected_net - current_net,
        revenue_change_percent=change_percent(current_net, projected_net),
        is_active=is_active_class(cls),
    )
