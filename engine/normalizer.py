"""Resolve every optional field to its fallback in one place.

Run on load (file upload, saved snapshot, sample data) and again at each
engine entry point; normalizing an already-normalized record is a no-op.
Class forecast overrides are not filled in: None there means "use the
growth formula".
"""

from dataclasses import replace

from models.campus import CampusData
from models.hostel import HostelData
from models.settings import CustomFee, GlobalSettings
from models.state import SimulationState


def _or(value, fallback):
    return fallback if value is None else value


def normalize_campus(campus: CampusData) -> CampusData:
    if campus.last_year_discount is not None:
        return campus
    return replace(campus, last_year_discount=campus.discount_rate)


def normalize_hostel(hostel: HostelData) -> HostelData:
    if hostel.last_year_fee_per_student is not None:
        return hostel
    return replace(hostel, last_year_fee_per_student=hostel.fee_per_student)


def normalize_custom_fee(fee: CustomFee) -> CustomFee:
    if fee.last_year_amount is not None:
        return fee
    return replace(fee, last_year_amount=fee.amount)


def normalize_settings(settings: GlobalSettings) -> GlobalSettings:
    return replace(
        settings,
        last_year_school_annual_fee=_or(settings.last_year_school_annual_fee, settings.school_annual_fee),
        last_year_hostel_annual_fee=_or(settings.last_year_hostel_annual_fee, settings.hostel_annual_fee),
        last_year_school_dcp=_or(settings.last_year_school_dcp, settings.school_dcp),
        last_year_admission_fee=_or(settings.last_year_admission_fee, settings.admission_fee),
        custom_fees=[normalize_custom_fee(f) for f in settings.custom_fees],
    )


def normalize_state(state: SimulationState) -> SimulationState:
    return SimulationState(
        campuses=[normalize_campus(c) for c in state.campuses],
        hostels=[normalize_hostel(h) for h in state.hostels],
        settings=normalize_settings(state.settings),
    )
