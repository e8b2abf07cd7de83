"""Schema validation for uploaded data files."""

from dataclasses import dataclass, field
from typing import List
import pandas as pd


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


CAMPUS_REQUIRED_COLUMNS = [
    "Campus ID",
    "Campus Name",
    "Max Capacity",
]

CLASS_REQUIRED_COLUMNS = [
    "Campus ID",
    "Class",
    "Renewal Students",
    "Renewal Fee",
    "New Students",
    "New Admission Fee",
]

HOSTEL_REQUIRED_COLUMNS = [
    "Hostel ID",
    "Hostel Name",
    "Occupancy",
    "Max Capacity",
    "Fee per Student",
]

SETTINGS_REQUIRED_COLUMNS = ["Parameter", "Value"]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _warn_non_numeric(df: pd.DataFrame, columns: List[str], file_label: str, result: ValidationResult):
    """Cells that will be read as 0 by the loader."""
    for col in columns:
        if col not in df.columns:
            continue
        coerced = pd.to_numeric(df[col], errors="coerce")
        bad = int((coerced.isna() & df[col].notna()).sum())
        blank = int(df[col].isna().sum())
        if bad:
            result.warnings.append(f"{file_label}: {bad} non-numeric value(s) in '{col}' will be treated as 0.")
        if blank:
            result.warnings.append(f"{file_label}: {blank} blank value(s) in '{col}' will be treated as 0.")


def validate_campuses(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, CAMPUS_REQUIRED_COLUMNS, "Campuses")
    if not result.is_valid:
        return result

    dupes = df.duplicated(subset=["Campus ID"], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Campuses: Duplicate campus IDs: {df[dupes]['Campus ID'].unique().tolist()}")

    _warn_non_numeric(df, ["Max Capacity", "Discount (%)"], "Campuses", result)

    capacity = pd.to_numeric(df["Max Capacity"], errors="coerce").fillna(0)
    if (capacity == 0).any():
        result.warnings.append("Campuses: Some campuses have no capacity set; utilization will show 0%.")

    return result


def validate_classes(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, CLASS_REQUIRED_COLUMNS, "Classes")
    if not result.is_valid:
        return result

    dupes = df.duplicated(subset=["Campus ID", "Class"], keep=False)
    if dupes.any():
        result.is_valid = False
        dupe_rows = df[dupes][["Campus ID", "Class"]].drop_duplicates().to_dict("records")
        result.errors.append(f"Classes: Duplicate class entries: {dupe_rows}")

    _warn_non_numeric(
        df, ["Renewal Students", "Renewal Fee", "New Students", "New Admission Fee"], "Classes", result,
    )
    return result


def validate_hostels(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, HOSTEL_REQUIRED_COLUMNS, "Hostels")
    if not result.is_valid:
        return result

    dupes = df.duplicated(subset=["Hostel ID"], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Hostels: Duplicate hostel IDs: {df[dupes]['Hostel ID'].unique().tolist()}")

    _warn_non_numeric(df, ["Occupancy", "Max Capacity", "Fee per Student"], "Hostels", result)

    occupancy = pd.to_numeric(df["Occupancy"], errors="coerce").fillna(0)
    capacity = pd.to_numeric(df["Max Capacity"], errors="coerce").fillna(0)
    over = df[occupancy > capacity]["Hostel Name"].tolist()
    if over:
        result.warnings.append(f"Hostels: Occupancy exceeds capacity for: {', '.join(map(str, over))}")

    return result


def validate_settings(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, SETTINGS_REQUIRED_COLUMNS, "Settings")
    if not result.is_valid:
        return result
    _warn_non_numeric(df, ["Value"], "Settings", result)
    return result


def validate_cross_file(campus_df: pd.DataFrame, class_df: pd.DataFrame) -> ValidationResult:
    """Check that class rows and campus rows refer to the same campuses."""
    result = ValidationResult()
    campus_ids = set(campus_df["Campus ID"].astype(str).str.strip())
    class_campus_ids = set(class_df["Campus ID"].astype(str).str.strip())

    unknown = class_campus_ids - campus_ids
    without_classes = campus_ids - class_campus_ids

    if unknown:
        result.warnings.append(
            f"Classes for unknown campuses: {', '.join(sorted(unknown))}. "
            "These will be ignored."
        )
    if without_classes:
        result.warnings.append(
            f"Campuses without class data: {', '.join(sorted(without_classes))}. "
            "They will project zero students and revenue."
        )
    return result
