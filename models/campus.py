from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ClassData:
    class_name: str
    renewal_count: int
    renewal_fee: float
    new_admission_count: int
    new_admission_fee: float
    forecast_renewal_count: Optional[int] = None        # replaces growth-derived count when set
    forecast_new_admission_count: Optional[int] = None

    @property
    def total_students(self) -> int:
        return self.renewal_count + self.new_admission_count


@dataclass(frozen=True)
class CampusData:
    campus_id: str
    name: str
    short_name: str
    max_capacity: int
    renewal_fee_hike: float = 0.0        # e.g. 5 for 5%
    new_admission_fee_hike: float = 0.0
    renewal_growth: float = 0.0
    new_student_growth: float = 0.0
    discount_rate: float = 0.0           # forecast year
    last_year_discount: Optional[float] = None  # current-year baseline
    annual_fee_applicable: bool = True
    classes: List[ClassData] = field(default_factory=list)

    @property
    def current_total_students(self) -> int:
        return sum(c.total_students for c in self.classes)
