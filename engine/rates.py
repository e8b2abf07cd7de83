"""Rate resolution and the numeric primitives shared by every engine step."""

import math

from models.campus import CampusData
from models.calculation import CampusRates
from models.settings import GlobalSettings


def resolve_rate(local_rate: float, global_delta: float) -> float:
    """Effective rate = entity-local value + global delta (both percentages)."""
    return local_rate + global_delta


def to_multiplier(rate: float) -> float:
    """Turn a percentage into a growth factor: 8 -> 1.08."""
    return 1 + rate / 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def safe_percent(part: float, whole: float) -> float:
    """part / whole as a percentage, 0.0 when whole is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100


def change_percent(current: float, projected: float) -> float:
    return safe_percent(projected - current, current)


def apply_discount(gross: float, discount_rate: float) -> float:
    """Net amount after a percentage discount."""
    return gross - gross * discount_rate / 100


def resolve_campus_rates(campus: CampusData, settings: GlobalSettings) -> CampusRates:
    """Resolve all four effective rates for a campus.

    The global delta for a population is the shared delta plus that
    population's own global delta.
    """
    return CampusRates(
        renewal_fee_hike=resolve_rate(
            campus.renewal_fee_hike, settings.fee_hike + settings.renewal_fee_hike),
        new_admission_fee_hike=resolve_rate(
            campus.new_admission_fee_hike, settings.fee_hike + settings.new_admission_fee_hike),
        renewal_growth=resolve_rate(
            campus.renewal_growth, settings.student_growth + settings.renewal_growth),
        new_student_growth=resolve_rate(
            campus.new_student_growth, settings.student_growth + settings.new_student_growth),
    )
