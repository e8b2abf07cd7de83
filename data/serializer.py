"""Convert scenario inputs to and from plain JSON-compatible dicts.

Only the input schema is serialized; derived figures are always
recomputed by the engine after a load. Loaded numbers are cleaned the
same way the file loader cleans spreadsheet cells: a missing or
non-numeric value becomes 0, and a blank optional value stays None so
its fallback applies.
"""

import json
import math
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from models.campus import CampusData, ClassData
from models.hostel import HostelData
from models.settings import CustomFee, GlobalSettings
from models.state import SimulationState
from engine.normalizer import normalize_state

# Record fields by kind: name -> numeric type
CLASS_NUMBERS = {
    "renewal_count": int, "renewal_fee": float, "new_admission_count": int, "new_admission_fee": float,
}
CLASS_OPTIONAL = {"forecast_renewal_count": int, "forecast_new_admission_count": int}

CAMPUS_NUMBERS = {
    "max_capacity": int, "renewal_fee_hike": float, "new_admission_fee_hike": float,
    "renewal_growth": float, "new_student_growth": float, "discount_rate": float,
}
CAMPUS_OPTIONAL = {"last_year_discount": float}

HOSTEL_NUMBERS = {"current_occupancy": int, "max_capacity": int, "fee_per_student": float}
HOSTEL_OPTIONAL = {"last_year_fee_per_student": float}

SETTINGS_NUMBERS = {
    name: float for name in (
        "fee_hike", "student_growth", "renewal_fee_hike", "new_admission_fee_hike", "renewal_growth",
        "new_student_growth", "global_discount", "school_annual_fee", "hostel_annual_fee", "school_dcp",
        "admission_fee",
    )
}
SETTINGS_OPTIONAL = {
    name: float for name in (
        "last_year_school_annual_fee", "last_year_hostel_annual_fee", "last_year_school_dcp",
        "last_year_admission_fee",
    )
}

CUSTOM_FEE_NUMBERS = {"amount": float}
CUSTOM_FEE_OPTIONAL = {"last_year_amount": float}

# Flag fields and their default when missing
FLAGS = {"annual_fee_applicable": True, "applies_to_school": True, "applies_to_hostel": False}
TEXT_FIELDS = {"campus_id", "name", "short_name", "class_name", "hostel_id", "fee_id"}


def state_to_dict(state: SimulationState) -> Dict[str, Any]:
    return {
        "campuses": [asdict(c) for c in state.campuses],
        "hostels": [asdict(h) for h in state.hostels],
        "settings": asdict(state.settings),
    }


def _parse(value) -> Optional[float]:
    """A finite number, or None for blank, null or non-numeric values."""
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _number(value, kind=float):
    number = _parse(value)
    return kind(0) if number is None else kind(number)


def _optional_number(value, kind=float):
    number = _parse(value)
    return None if number is None else kind(number)


def _flag(value, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("yes", "y", "true", "1")
    return bool(value)


def _clean(record, label: str, numbers: dict, optional: dict) -> dict:
    if not isinstance(record, dict):
        raise ValueError(f"Malformed scenario data: {label} must be an object, got {type(record).__name__}")
    cleaned = dict(record)
    for name, kind in numbers.items():
        cleaned[name] = _number(cleaned.get(name), kind)
    for name, kind in optional.items():
        if name in cleaned:
            cleaned[name] = _optional_number(cleaned[name], kind)
    for name, default in FLAGS.items():
        if name in cleaned:
            cleaned[name] = _flag(cleaned[name], default)
    for name in TEXT_FIELDS & cleaned.keys():
        cleaned[name] = "" if cleaned[name] is None else str(cleaned[name])
    return cleaned


def _records(data: dict, key: str) -> List:
    records = data.get(key) or []
    if not isinstance(records, list):
        raise ValueError(f"Malformed scenario data: '{key}' must be a list")
    return records


def _class_from_dict(data) -> ClassData:
    return ClassData(**_clean(data, "class", CLASS_NUMBERS, CLASS_OPTIONAL))


def _campus_from_dict(data) -> CampusData:
    data = _clean(data, "campus", CAMPUS_NUMBERS, CAMPUS_OPTIONAL)
    classes = [_class_from_dict(c) for c in _records(data, "classes")]
    data.pop("classes", None)
    return CampusData(classes=classes, **data)


def _hostel_from_dict(data) -> HostelData:
    return HostelData(**_clean(data, "hostel", HOSTEL_NUMBERS, HOSTEL_OPTIONAL))


def _settings_from_dict(data) -> GlobalSettings:
    data = _clean(data or {}, "settings", SETTINGS_NUMBERS, SETTINGS_OPTIONAL)
    custom_fees = [
        CustomFee(**_clean(f, "custom fee", CUSTOM_FEE_NUMBERS, CUSTOM_FEE_OPTIONAL))
        for f in _records(data, "custom_fees")
    ]
    data.pop("custom_fees", None)
    return GlobalSettings(custom_fees=custom_fees, **data)


def state_from_dict(data: Dict[str, Any]) -> SimulationState:
    """Rebuild a normalized state; raises ValueError on a malformed payload."""
    if not isinstance(data, dict):
        raise ValueError(f"Malformed scenario data: expected an object, got {type(data).__name__}")
    try:
        state = SimulationState(
            campuses=[_campus_from_dict(c) for c in _records(data, "campuses")],
            hostels=[_hostel_from_dict(h) for h in _records(data, "hostels")],
            settings=_settings_from_dict(data.get("settings")),
        )
    except TypeError as exc:
        raise ValueError(f"Malformed scenario data: {exc}") from exc
    return normalize_state(state)


def state_to_json(state: SimulationState, indent: int = 2) -> str:
    return json.dumps(state_to_dict(state), indent=indent)


def state_from_json(text: str) -> SimulationState:
    return state_from_dict(json.loads(text))
