"""Pure reducers over SimulationState.

Each function takes the current state and returns a new one; inputs are
never mutated. Patches are validated before they are applied and invalid
patches or unknown targets raise ValueError.
"""

import uuid
from dataclasses import replace
from numbers import Number
from typing import List, Optional

from models.campus import CampusData, ClassData
from models.hostel import HostelData
from models.patch import (
    CampusPatch, ClassPatch, CustomFeePatch, EntityPatch, HostelPatch, NON_NUMERIC_FIELDS,
    SettingsPatch, changed_fields,
)
from models.settings import CustomFee
from models.state import SimulationState
from engine.normalizer import normalize_state

FLAG_FIELDS = {"annual_fee_applicable", "applies_to_school", "applies_to_hostel"}
COUNT_FIELDS = {
    "max_capacity", "renewal_count", "new_admission_count",
    "forecast_renewal_count", "forecast_new_admission_count", "current_occupancy",
}


def validate_patch(patch: EntityPatch) -> List[str]:
    """Return a list of problems with a patch; empty means it can be applied."""
    if not isinstance(patch, (CampusPatch, ClassPatch, HostelPatch, SettingsPatch, CustomFeePatch)):
        return [f"Unsupported patch type: {type(patch).__name__}"]

    errors = []
    for name, value in changed_fields(patch).items():
        if name in FLAG_FIELDS:
            if not isinstance(value, bool):
                errors.append(f"{name} must be True or False, got {value!r}")
        elif name in NON_NUMERIC_FIELDS:
            if not isinstance(value, str) or not value.strip():
                errors.append(f"{name} must be a non-empty string")
        elif isinstance(value, bool) or not isinstance(value, Number):
            errors.append(f"{name} must be a number, got {value!r}")
        elif name in COUNT_FIELDS and value != int(value):
            errors.append(f"{name} must be a whole number, got {value!r}")
    return errors


def _checked_changes(patch: EntityPatch) -> dict:
    errors = validate_patch(patch)
    if errors:
        raise ValueError("; ".join(errors))
    changes = changed_fields(patch)
    for name in COUNT_FIELDS & changes.keys():
        changes[name] = int(changes[name])
    return changes


def _replace_campus(state: SimulationState, campus_id: str, campus: CampusData) -> SimulationState:
    campuses = [campus if c.campus_id == campus_id else c for c in state.campuses]
    return replace(state, campuses=campuses)


def _require_campus(state: SimulationState, campus_id: str) -> CampusData:
    campus = state.find_campus(campus_id)
    if campus is None:
        raise ValueError(f"Unknown campus: {campus_id}")
    return campus


# --- Campus / class ---

def apply_campus_patch(state: SimulationState, campus_id: str, patch: CampusPatch) -> SimulationState:
    if not isinstance(patch, CampusPatch):
        raise ValueError(f"Expected CampusPatch, got {type(patch).__name__}")
    changes = _checked_changes(patch)
    campus = _require_campus(state, campus_id)
    return _replace_campus(state, campus_id, replace(campus, **changes))


def apply_class_patch(
    state: SimulationState,
    campus_id: str,
    class_index: int,
    patch: ClassPatch,
) -> SimulationState:
    if not isinstance(patch, ClassPatch):
        raise ValueError(f"Expected ClassPatch, got {type(patch).__name__}")
    changes = _checked_changes(patch)
    campus = _require_campus(state, campus_id)
    if not 0 <= class_index < len(campus.classes):
        raise ValueError(f"Class index {class_index} out of range for campus {campus_id}")

    cls = campus.classes[class_index]
    if patch.clear_forecast_overrides:
        cls = replace(cls, forecast_renewal_count=None, forecast_new_admission_count=None)
    cls = replace(cls, **changes)

    classes = list(campus.classes)
    classes[class_index] = cls
    return _replace_campus(state, campus_id, replace(campus, classes=classes))


def add_class(state: SimulationState, campus_id: str, cls: ClassData) -> SimulationState:
    campus = _require_campus(state, campus_id)
    return _replace_campus(state, campus_id, replace(campus, classes=list(campus.classes) + [cls]))


def apply_global_discount(state: SimulationState, discount: float) -> SimulationState:
    """Set the forecast discount of every campus and record it globally."""
    if isinstance(discount, bool) or not isinstance(discount, Number):
        raise ValueError(f"discount must be a number, got {discount!r}")
    campuses = [replace(c, discount_rate=discount) for c in state.campuses]
    settings = replace(state.settings, global_discount=discount)
    return replace(state, campuses=campuses, settings=settings)


# --- Hostel ---

def apply_hostel_patch(state: SimulationState, hostel_id: str, patch: HostelPatch) -> SimulationState:
    if not isinstance(patch, HostelPatch):
        raise ValueError(f"Expected HostelPatch, got {type(patch).__name__}")
    changes = _checked_changes(patch)
    hostel = state.find_hostel(hostel_id)
    if hostel is None:
        raise ValueError(f"Unknown hostel: {hostel_id}")
    updated: HostelData = replace(hostel, **changes)
    hostels = [updated if h.hostel_id == hostel_id else h for h in state.hostels]
    return replace(state, hostels=hostels)


# --- Global settings / custom fees ---

def apply_settings_patch(state: SimulationState, patch: SettingsPatch) -> SimulationState:
    if not isinstance(patch, SettingsPatch):
        raise ValueError(f"Expected SettingsPatch, got {type(patch).__name__}")
    changes = _checked_changes(patch)
    return replace(state, settings=replace(state.settings, **changes))


def add_custom_fee(
    state: SimulationState,
    name: str,
    amount: float,
    applies_to_school: bool = True,
    applies_to_hostel: bool = False,
    fee_id: Optional[str] = None,
) -> SimulationState:
    fee = CustomFee(
        fee_id=fee_id or uuid.uuid4().hex[:8],
        name=name,
        amount=amount,
        applies_to_school=applies_to_school,
        applies_to_hostel=applies_to_hostel,
    )
    # Reuse the patch checks for the user-editable fields
    _checked_changes(CustomFeePatch(
        name=name, amount=amount,
        applies_to_school=applies_to_school, applies_to_hostel=applies_to_hostel,
    ))
    if any(f.fee_id == fee.fee_id for f in state.settings.custom_fees):
        raise ValueError(f"Custom fee id already exists: {fee.fee_id}")
    custom_fees = list(state.settings.custom_fees) + [fee]
    return replace(state, settings=replace(state.settings, custom_fees=custom_fees))


def apply_custom_fee_patch(state: SimulationState, fee_id: str, patch: CustomFeePatch) -> SimulationState:
    if not isinstance(patch, CustomFeePatch):
        raise ValueError(f"Expected CustomFeePatch, got {type(patch).__name__}")
    changes = _checked_changes(patch)
    if not any(f.fee_id == fee_id for f in state.settings.custom_fees):
        raise ValueError(f"Unknown custom fee: {fee_id}")
    custom_fees = [replace(f, **changes) if f.fee_id == fee_id else f for f in state.settings.custom_fees]
    return replace(state, settings=replace(state.settings, custom_fees=custom_fees))


def remove_custom_fee(state: SimulationState, fee_id: str) -> SimulationState:
    remaining = [f for f in state.settings.custom_fees if f.fee_id != fee_id]
    if len(remaining) == len(state.settings.custom_fees):
        raise ValueError(f"Unknown custom fee: {fee_id}")
    return replace(state, settings=replace(state.settings, custom_fees=remaining))


# --- Dispatch ---

def apply_patch(
    state: SimulationState,
    patch: EntityPatch,
    target_id: Optional[str] = None,
    class_index: Optional[int] = None,
) -> SimulationState:
    """Route a patch to the reducer for its entity type."""
    if isinstance(patch, SettingsPatch):
        return apply_settings_patch(state, patch)
    if target_id is None:
        raise ValueError(f"{type(patch).__name__} needs a target id")
    if isinstance(patch, CampusPatch):
        return apply_campus_patch(state, target_id, patch)
    if isinstance(patch, ClassPatch):
        if class_index is None:
            raise ValueError("ClassPatch needs a class index")
        return apply_class_patch(state, target_id, class_index, patch)
    if isinstance(patch, HostelPatch):
        return apply_hostel_patch(state, target_id, patch)
    if isinstance(patch, CustomFeePatch):
        return apply_custom_fee_patch(state, target_id, patch)
    raise ValueError(f"Unsupported patch type: {type(patch).__name__}")


def reset_state(defaults: SimulationState) -> SimulationState:
    """Discard every edit and start again from the given defaults."""
    return normalize_state(defaults)
