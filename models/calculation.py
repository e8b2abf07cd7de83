"""Derived figures produced by the revenue engine.

Every record here is plain data (numbers, strings, nested records) so the
presentation layer and the exporters can consume it without re-deriving
anything.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class CampusRates:
    """Effective rates (local + global), as percentages."""
    renewal_fee_hike: float
    new_admission_fee_hike: float
    renewal_growth: float
    new_student_growth: float


@dataclass
class PopulationProjection:
    current_count: int
    current_fee: float
    current_revenue: float
    projected_count: int
    projected_fee: float
    projected_revenue: float
    is_overridden: bool = False


@dataclass
class ClassCalculation:
    class_name: str
    renewal: PopulationProjection
    new_admission: PopulationProjection
    current_total_students: int
    projected_total_students: int
    current_gross_revenue: float
    projected_gross_revenue: float
    current_revenue: float       # net of discount
    projected_revenue: float     # net of discount
    revenue_change: float
    revenue_change_percent: float
    is_active: bool = True


@dataclass
class CampusCalculation:
    campus_id: str
    campus_name: str
    short_name: str
    current_renewal_students: int
    current_new_students: int
    current_total_students: int
    projected_renewal_students: int
    projected_new_students: int
    projected_total_students: int
    current_renewal_revenue: float
    current_new_revenue: float
    current_gross_revenue: float
    current_net_revenue: float
    projected_renewal_revenue: float
    projected_new_revenue: float
    projected_gross_revenue: float
    projected_net_revenue: float
    current_discount_rate: float
    projected_discount_rate: float
    current_discount_amount: float
    projected_discount_amount: float
    revenue_change: float
    revenue_change_percent: float
    max_capacity: int
    is_over_capacity: bool
    capacity_utilization: float
    capacity_defined: bool
    annual_fee_applicable: bool
    current_admission_fee_revenue: float
    projected_admission_fee_revenue: float
    rates: CampusRates
    classes: List[ClassCalculation] = field(default_factory=list)

    @property
    def active_classes(self) -> List[ClassCalculation]:
        return [c for c in self.classes if c.is_active]


@dataclass
class HostelCalculation:
    hostel_id: str
    hostel_name: str
    current_occupancy: int
    projected_occupancy: int
    max_capacity: int
    current_fee_per_student: float
    projected_fee_per_student: float
    current_revenue: float
    projected_revenue: float
    revenue_change: float
    revenue_change_percent: float
    utilization_percent: float
    capacity_defined: bool
    is_over_capacity: bool
    available_beds: int


@dataclass
class FeeLine:
    label: str
    current: float
    projected: float

    @property
    def change(self) -> float:
        return self.projected - self.current


@dataclass
class CustomFeeTotal:
    fee_id: str
    name: str
    amount: float
    applies_to_school: bool
    applies_to_hostel: bool
    current_school_total: float
    current_hostel_total: float
    projected_school_total: float
    projected_hostel_total: float

    @property
    def current_total(self) -> float:
        return self.current_school_total + self.current_hostel_total

    @property
    def projected_total(self) -> float:
        return self.projected_school_total + self.projected_hostel_total


@dataclass
class AdditionalFees:
    current_school_annual_fee: float
    projected_school_annual_fee: float
    current_hostel_annual_fee: float
    projected_hostel_annual_fee: float
    current_dcp_total: float
    projected_dcp_total: float
    current_admission_fee_total: float
    projected_admission_fee_total: float
    current_custom_fee_total: float
    projected_custom_fee_total: float
    custom_fees: List[CustomFeeTotal] = field(default_factory=list)

    @property
    def current_annual_fee_total(self) -> float:
        return self.current_school_annual_fee + self.current_hostel_annual_fee

    @property
    def projected_annual_fee_total(self) -> float:
        return self.projected_school_annual_fee + self.projected_hostel_annual_fee

    @property
    def current_total(self) -> float:
        return (self.current_annual_fee_total + self.current_dcp_total
                + self.current_admission_fee_total + self.current_custom_fee_total)

    @property
    def projected_total(self) -> float:
        return (self.projected_annual_fee_total + self.projected_dcp_total
                + self.projected_admission_fee_total + self.projected_custom_fee_total)


@dataclass
class CampusFeeBreakdown:
    campus_id: str
    campus_name: str
    lines: List[FeeLine]
    current_grand_total: float
    projected_grand_total: float
    grand_total_change: float
    grand_total_change_percent: float


@dataclass
class TotalCalculation:
    campus_count: int
    hostel_count: int
    over_capacity_count: int
    # Students (hostel students are a subset of school students)
    current_school_students: int
    projected_school_students: int
    current_renewal_students: int
    projected_renewal_students: int
    current_new_students: int
    projected_new_students: int
    hostel_students: int
    student_growth_percent: float
    # Tuition
    current_school_revenue: float
    projected_school_revenue: float
    current_hostel_revenue: float
    projected_hostel_revenue: float
    current_tuition_revenue: float
    projected_tuition_revenue: float
    tuition_change: float
    tuition_change_percent: float
    # Discount tracking
    current_gross_revenue: float
    projected_gross_revenue: float
    current_discount_amount: float
    projected_discount_amount: float
    average_current_discount_rate: float
    average_projected_discount_rate: float
    # Ancillary fees and grand total
    additional_fees: AdditionalFees
    current_grand_total: float
    projected_grand_total: float
    grand_total_change: float
    grand_total_change_percent: float


@dataclass
class SimulationResult:
    campuses: List[CampusCalculation]
    hostels: List[HostelCalculation]
    totals: TotalCalculation

    def all_classes(self, include_inactive: bool = False) -> List[tuple]:
        """Flatten to (campus, class) pairs for breakdown tables."""
        rows = []
        for campus in self.campuses:
            for cls in campus.classes:
                if include_inactive or cls.is_active:
                    rows.append((campus, cls))
        return rows
