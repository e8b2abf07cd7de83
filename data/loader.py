"""File upload parsing: CSV/XLSX into typed model lists."""

import logging
import re
import uuid
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import pandas as pd

from models.campus import CampusData, ClassData
from models.hostel import HostelData
from models.settings import CustomFee, GlobalSettings
from engine.normalizer import normalize_campus, normalize_hostel, normalize_settings

logger = logging.getLogger(__name__)


def _numeric(df: pd.DataFrame, column: str) -> pd.Series:
    """Coerce a column to numbers; missing or non-numeric cells become 0."""
    if column not in df.columns:
        return pd.Series(0, index=df.index)
    return pd.to_numeric(df[column], errors="coerce").fillna(0)


def _optional_numeric(row: pd.Series, df: pd.DataFrame, column: str) -> Optional[float]:
    """A blank optional cell stays None so the fallback applies later."""
    if column not in df.columns:
        return None
    value = pd.to_numeric(pd.Series([row[column]]), errors="coerce").iloc[0]
    return None if pd.isna(value) else float(value)


def _flag(value, default: bool = True) -> bool:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("yes", "y", "true", "1")
    return bool(value)


def parse_classes(df: pd.DataFrame) -> Dict[str, List[ClassData]]:
    """Convert a classes DataFrame into ClassData lists keyed by campus ID."""
    renewal_count = _numeric(df, "Renewal Students")
    renewal_fee = _numeric(df, "Renewal Fee")
    new_count = _numeric(df, "New Students")
    new_fee = _numeric(df, "New Admission Fee")

    by_campus: Dict[str, List[ClassData]] = {}
    for idx, row in df.iterrows():
        forecast_renewal = _optional_numeric(row, df, "Forecast Renewal Students")
        forecast_new = _optional_numeric(row, df, "Forecast New Students")
        cls = ClassData(
            class_name=str(row["Class"]).strip(),
            renewal_count=int(renewal_count[idx]),
            renewal_fee=float(renewal_fee[idx]),
            new_admission_count=int(new_count[idx]),
            new_admission_fee=float(new_fee[idx]),
            forecast_renewal_count=None if forecast_renewal is None else int(forecast_renewal),
            forecast_new_admission_count=None if forecast_new is None else int(forecast_new),
        )
        by_campus.setdefault(str(row["Campus ID"]).strip(), []).append(cls)
    return by_campus


def parse_campuses(campus_df: pd.DataFrame, class_df: pd.DataFrame) -> List[CampusData]:
    """Convert campus and class DataFrames into normalized CampusData objects."""
    classes = parse_classes(class_df)
    capacity = _numeric(campus_df, "Max Capacity")
    renewal_hike = _numeric(campus_df, "Renewal Fee Hike (%)")
    new_hike = _numeric(campus_df, "New Admission Fee Hike (%)")
    renewal_growth = _numeric(campus_df, "Renewal Growth (%)")
    new_growth = _numeric(campus_df, "New Student Growth (%)")
    discount = _numeric(campus_df, "Discount (%)")

    campuses = []
    for idx, row in campus_df.iterrows():
        campus_id = str(row["Campus ID"]).strip()
        name = str(row["Campus Name"]).strip()
        short_name = name
        if "Short Name" in campus_df.columns and pd.notna(row.get("Short Name")):
            short_name = str(row["Short Name"]).strip()
        annual = _flag(row.get("Annual Fee Applicable")) if "Annual Fee Applicable" in campus_df.columns else True

        campuses.append(normalize_campus(CampusData(
            campus_id=campus_id,
            name=name,
            short_name=short_name,
            max_capacity=int(capacity[idx]),
            renewal_fee_hike=float(renewal_hike[idx]),
            new_admission_fee_hike=float(new_hike[idx]),
            renewal_growth=float(renewal_growth[idx]),
            new_student_growth=float(new_growth[idx]),
            discount_rate=float(discount[idx]),
            last_year_discount=_optional_numeric(row, campus_df, "Last Year Discount (%)"),
            annual_fee_applicable=annual,
            classes=classes.get(campus_id, []),
        )))
    logger.info("Parsed %d campuses with %d classes", len(campuses), sum(len(c.classes) for c in campuses))
    return campuses


def parse_hostels(df: pd.DataFrame) -> List[HostelData]:
    """Convert a hostels DataFrame into normalized HostelData objects."""
    occupancy = _numeric(df, "Occupancy")
    capacity = _numeric(df, "Max Capacity")
    fee = _numeric(df, "Fee per Student")

    hostels = []
    for idx, row in df.iterrows():
        hostels.append(normalize_hostel(HostelData(
            hostel_id=str(row["Hostel ID"]).strip(),
            name=str(row["Hostel Name"]).strip(),
            current_occupancy=int(occupancy[idx]),
            max_capacity=int(capacity[idx]),
            fee_per_student=float(fee[idx]),
            last_year_fee_per_student=_optional_numeric(row, df, "Last Year Fee per Student"),
        )))
    logger.info("Parsed %d hostels", len(hostels))
    return hostels


# Settings sheet rows: Parameter -> GlobalSettings field
SETTINGS_PARAMETERS = {
    "fee hike (%)": "fee_hike",
    "student growth (%)": "student_growth",
    "renewal fee hike adj. (%)": "renewal_fee_hike",
    "new admission fee hike adj. (%)": "new_admission_fee_hike",
    "renewal growth adj. (%)": "renewal_growth",
    "new student growth adj. (%)": "new_student_growth",
    "global discount (%)": "global_discount",
    "school annual fee": "school_annual_fee",
    "hostel annual fee": "hostel_annual_fee",
    "school dcp": "school_dcp",
    "admission fee": "admission_fee",
    "last year school annual fee": "last_year_school_annual_fee",
    "last year hostel annual fee": "last_year_hostel_annual_fee",
    "last year school dcp": "last_year_school_dcp",
    "last year admission fee": "last_year_admission_fee",
}


# "Custom: <name> (<scope>)" rows declare per-student custom fees
CUSTOM_FEE_ROW = re.compile(r"^custom:\s*(?P<name>.+?)\s*(?:\((?P<scope>[^()]*)\))?$", re.IGNORECASE)
CUSTOM_FEE_SCOPES = {
    "school": (True, False),
    "hostel": (False, True),
    "school/hostel": (True, True),
    "none": (False, False),
}


def _custom_fee_scope(scope: Optional[str]) -> Optional[Tuple[bool, bool]]:
    if scope is None:
        return (True, False)
    return CUSTOM_FEE_SCOPES.get(scope.replace(" ", "").lower())


def _merge_custom_fees(existing: List[CustomFee], declared: List[Tuple[str, float, bool, bool]]) -> List[CustomFee]:
    """Update same-named fees in place and append new ones."""
    fees = list(existing)
    for name, amount, school, hostel in declared:
        match = next((i for i, f in enumerate(fees) if f.name.lower() == name.lower()), None)
        if match is None:
            fees.append(CustomFee(uuid.uuid4().hex[:8], name, amount,
                                  applies_to_school=school, applies_to_hostel=hostel))
        else:
            fees[match] = replace(fees[match], amount=amount, applies_to_school=school, applies_to_hostel=hostel)
    return fees


def parse_settings(df: pd.DataFrame, base: Optional[GlobalSettings] = None) -> GlobalSettings:
    """Read a two-column Parameter/Value sheet over the given base settings.

    Rows named like ``Custom: Sports (School/Hostel)`` declare custom fees;
    the scope defaults to School, and a fee already in the base settings
    with the same name is updated rather than duplicated. Unknown
    parameters are logged and skipped; non-numeric values become 0.
    """
    values = {}
    declared = []
    numbers = _numeric(df, "Value")
    for idx, row in df.iterrows():
        label = str(row["Parameter"]).strip()
        custom = CUSTOM_FEE_ROW.match(label)
        if custom:
            scope = _custom_fee_scope(custom.group("scope"))
            if scope is None:
                logger.warning("Ignoring custom fee with unknown scope: %s", label)
                continue
            declared.append((custom.group("name"), float(numbers[idx])) + scope)
            continue
        field_name = SETTINGS_PARAMETERS.get(label.lower())
        if field_name is None:
            logger.warning("Ignoring unknown settings parameter: %s", row["Parameter"])
            continue
        values[field_name] = float(numbers[idx])

    settings = base or GlobalSettings()
    if declared:
        values["custom_fees"] = _merge_custom_fees(settings.custom_fees, declared)
    return normalize_settings(replace(settings, **values))


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


# Expected sheet names for multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    "campuses": ["campuses", "campus", "campus master", "schools"],
    "classes": ["classes", "class", "class data", "class breakdown", "enrollment"],
    "hostels": ["hostels", "hostel", "boarding"],
    "settings": ["settings", "global settings", "parameters"],
}
OPTIONAL_SHEETS = {"hostels", "settings"}


def _match_sheet(sheet_names: List[str], category: str) -> Optional[str]:
    """Find a sheet name matching the given category.

    Returns None for a missing optional sheet and raises for a missing
    required one.
    """
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    if category in OPTIONAL_SHEETS:
        return None
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_multi_sheet_excel(
    uploaded_file,
) -> Tuple[pd.DataFrame, pd.DataFrame, Optional[pd.DataFrame], Optional[pd.DataFrame]]:
    """Load a single Excel file with Campuses, Classes, Hostels and Settings tabs.

    Sheet names are matched case-insensitively. Hostels and Settings are
    optional and come back as None when absent.

    Returns (campus_df, class_df, hostel_df, settings_df).
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    frames = []
    for category in ("campuses", "classes", "hostels", "settings"):
        sheet = _match_sheet(sheet_names, category)
        frames.append(pd.read_excel(xl, sheet_name=sheet) if sheet is not None else None)

    logger.info("Loaded workbook sheets: %s", sheet_names)
    return frames[0], frames[1], frames[2], frames[3]
