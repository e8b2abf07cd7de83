"""Typed partial updates for scenario entities.

Each patch names exactly the fields a user can edit for one entity type.
A field left as None means "unchanged".
"""

from dataclasses import dataclass, fields
from typing import Optional, Union


@dataclass(frozen=True)
class CampusPatch:
    name: Optional[str] = None
    short_name: Optional[str] = None
    max_capacity: Optional[int] = None
    renewal_fee_hike: Optional[float] = None
    new_admission_fee_hike: Optional[float] = None
    renewal_growth: Optional[float] = None
    new_student_growth: Optional[float] = None
    discount_rate: Optional[float] = None
    last_year_discount: Optional[float] = None
    annual_fee_applicable: Optional[bool] = None


@dataclass(frozen=True)
class ClassPatch:
    class_name: Optional[str] = None
    renewal_count: Optional[int] = None
    renewal_fee: Optional[float] = None
    new_admission_count: Optional[int] = None
    new_admission_fee: Optional[float] = None
    forecast_renewal_count: Optional[int] = None
    forecast_new_admission_count: Optional[int] = None
    clear_forecast_overrides: bool = False


@dataclass(frozen=True)
class HostelPatch:
    name: Optional[str] = None
    current_occupancy: Optional[int] = None
    max_capacity: Optional[int] = None
    fee_per_student: Optional[float] = None
    last_year_fee_per_student: Optional[float] = None


@dataclass(frozen=True)
class SettingsPatch:
    fee_hike: Optional[float] = None
    student_growth: Optional[float] = None
    renewal_fee_hike: Optional[float] = None
    new_admission_fee_hike: Optional[float] = None
    renewal_growth: Optional[float] = None
    new_student_growth: Optional[float] = None
    global_discount: Optional[float] = None
    school_annual_fee: Optional[float] = None
    hostel_annual_fee: Optional[float] = None
    school_dcp: Optional[float] = None
    admission_fee: Optional[float] = None
    last_year_school_annual_fee: Optional[float] = None
    last_year_hostel_annual_fee: Optional[float] = None
    last_year_school_dcp: Optional[float] = None
    last_year_admission_fee: Optional[float] = None


@dataclass(frozen=True)
class CustomFeePatch:
    name: Optional[str] = None
    amount: Optional[float] = None
    applies_to_school: Optional[bool] = None
    applies_to_hostel: Optional[bool] = None
    last_year_amount: Optional[float] = None


EntityPatch = Union[CampusPatch, ClassPatch, HostelPatch, SettingsPatch, CustomFeePatch]

# Fields that are flags or labels rather than numbers
NON_NUMERIC_FIELDS = {
    "name", "short_name", "class_name",
    "annual_fee_applicable", "applies_to_school", "applies_to_hostel",
    "clear_forecast_overrides",
}


def changed_fields(patch: EntityPatch) -> dict:
    """Return {field: value} for every field the patch actually sets."""
    changes = {}
    for f in fields(patch):
        if f.name == "clear_forecast_overrides":
            continue
        value = getattr(patch, f.name)
        if value is not None:
            changes[f.name] = value
    return changes
