from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from models.campus import CampusData
from models.hostel import HostelData
from models.settings import GlobalSettings


@dataclass(frozen=True)
class SimulationState:
    campuses: List[CampusData] = field(default_factory=list)
    hostels: List[HostelData] = field(default_factory=list)
    settings: GlobalSettings = field(default_factory=GlobalSettings)

    def find_campus(self, campus_id: str):
        return next((c for c in self.campuses if c.campus_id == campus_id), None)

    def find_hostel(self, hostel_id: str):
        return next((h for h in self.hostels if h.hostel_id == hostel_id), None)


@dataclass(frozen=True)
class SavedScenario:
    scenario_id: str
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    state: SimulationState
