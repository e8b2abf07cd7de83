from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class CustomFee:
    fee_id: str
    name: str
    amount: float                  # per student, per year
    applies_to_school: bool = True
    applies_to_hostel: bool = False
    last_year_amount: Optional[float] = None


@dataclass(frozen=True)
class GlobalSettings:
    """System-wide scenario parameters.

    Rates are plain percentages. The per-population deltas
    (renewal_fee_hike, new_admission_fee_hike, renewal_growth,
    new_student_growth) are added on top of the shared fee_hike /
    student_growth. Every last_year_* fee defaults to its forecast value.
    """
    fee_hike: float = 0.0
    student_growth: float = 0.0
    renewal_fee_hike: float = 0.0
    new_admission_fee_hike: float = 0.0
    renewal_growth: float = 0.0
    new_student_growth: float = 0.0
    global_discount: float = 0.0
    school_annual_fee: float = 0.0
    hostel_annual_fee: float = 0.0
    school_dcp: float = 0.0        # digital-resource fee, school students only
    admission_fee: float = 0.0     # one-time, new admissions only
    custom_fees: List[CustomFee] = field(default_factory=list)
    last_year_school_annual_fee: Optional[float] = None
    last_year_hostel_annual_fee: Optional[float] = None
    last_year_school_dcp: Optional[float] = None
    last_year_admission_fee: Optional[float] = None
