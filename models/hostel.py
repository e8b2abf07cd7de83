from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HostelData:
    hostel_id: str
    name: str
    current_occupancy: int
    max_capacity: int
    fee_per_student: float                              # forecast year
    last_year_fee_per_student: Optional[float] = None   # display baseline for the current year
