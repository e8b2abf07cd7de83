"""Hostel revenue: fixed occupancy, last-year fee baseline, no growth or discount."""

from typing import List

from models.hostel import HostelData
from models.calculation import HostelCalculation
from engine.normalizer import normalize_hostel
from engine.rates import change_percent, safe_percent


def calculate_hostel_revenue(hostel: HostelData) -> HostelCalculation:
    hostel = normalize_hostel(hostel)
    occupancy = hostel.current_occupancy

    current_revenue = occupancy * hostel.last_year_fee_per_student
    projected_revenue = occupancy * hostel.fee_per_student

    return HostelCalculation(
        hostel_id=hostel.hostel_id,
        hostel_name=hostel.name,
        current_occupancy=occupancy,
        projected_occupancy=occupancy,
        max_capacity=hostel.max_capacity,
        current_fee_per_student=hostel.last_year_fee_per_student,
        projected_fee_per_student=hostel.fee_per_student,
        current_revenue=current_revenue,
        projected_revenue=projected_revenue,
        revenue_change=projected_revenue - current_revenue,
        revenue_change_percent=change_percent(current_revenue, projected_revenue),
        utilization_percent=safe_percent(occupancy, hostel.max_capacity),
        capacity_defined=hostel.max_capacity != 0,
        is_over_capacity=occupancy > hostel.max_capacity,
        available_beds=hostel.max_capacity - occupancy,
    )


def calculate_all_hostels(hostels: List[HostelData]) -> List[HostelCalculation]:
    return [calculate_hostel_revenue(h) for h in hostels]
