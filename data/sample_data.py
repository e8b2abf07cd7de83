"""Generate synthetic sample datasets for the School Revenue Forecaster."""

import pandas as pd
import random
import os

from models.settings import GlobalSettings
from models.state import SimulationState
from config.defaults import (
    DEFAULT_FEE_HIKE, DEFAULT_STUDENT_GROWTH, DEFAULT_GLOBAL_DISCOUNT,
    DEFAULT_SCHOOL_ANNUAL_FEE, DEFAULT_HOSTEL_ANNUAL_FEE, DEFAULT_SCHOOL_DCP, DEFAULT_ADMISSION_FEE,
)
from data.loader import parse_campuses, parse_hostels
from engine.normalizer import normalize_state

CAMPUSES = [
    ("ISB-BOYS", "Islamabad Boys Campus", "Islamabad Boys", 900, True),
    ("ISB-GIRLS", "Islamabad Girls Campus", "Islamabad Girls", 700, True),
    ("LHR", "Lahore Campus", "Lahore", 800, True),
    ("KHI", "Karachi Campus", "Karachi", 650, True),
    ("PEW", "Peshawar Campus", "Peshawar", 500, False),
    ("QTA", "Quetta Campus", "Quetta", 350, False),
]

CLASSES = [
    "Playgroup", "Nursery", "Prep", "Grade 1", "Grade 2", "Grade 3", "Grade 4",
    "Grade 5", "Grade 6", "Grade 7", "Grade 8", "O Level I", "O Level II", "A Level",
]


def generate_campuses_df() -> pd.DataFrame:
    """Generate campus master data: 6 campuses with local rates and discounts."""
    random.seed(42)
    rows = []
    for campus_id, name, short_name, capacity, annual in CAMPUSES:
        discount = random.choice([10, 12, 15, 18])
        rows.append({
            "Campus ID": campus_id,
            "Campus Name": name,
            "Short Name": short_name,
            "Max Capacity": capacity,
            "Renewal Fee Hike (%)": random.choice([0, 2, 5]),
            "New Admission Fee Hike (%)": random.choice([0, 3, 5, 8]),
            "Renewal Growth (%)": random.choice([-2, 0, 3]),
            "New Student Growth (%)": random.choice([0, 5, 10]),
            "Discount (%)": discount,
            "Last Year Discount (%)": discount - random.choice([0, 2, 3]),
            "Annual Fee Applicable": "Yes" if annual else "No",
        })
    return pd.DataFrame(rows)


def generate_classes_df() -> pd.DataFrame:
    """Generate per-class enrollment and fees for every campus."""
    random.seed(7)
    rows = []
    for campus_id, _, _, capacity, _ in CAMPUSES:
        per_class = capacity / len(CLASSES)
        for idx, class_name in enumerate(CLASSES):
            base_fee = 180000 + idx * 15000
            renewal = 0 if class_name == "Playgroup" else round(per_class * random.uniform(0.55, 0.8))
            new = round(per_class * random.uniform(0.1, 0.35))
            rows.append({
                "Campus ID": campus_id,
                "Class": class_name,
                "Renewal Students": renewal,
                "Renewal Fee": 0 if renewal == 0 else base_fee,
                "New Students": new,
                "New Admission Fee": round(base_fee * 1.1, -3),
            })
    return pd.DataFrame(rows)


def generate_hostels_df() -> pd.DataFrame:
    """Generate hostel occupancy and fees for the two boarding houses."""
    return pd.DataFrame([
        {"Hostel ID": "H-BOYS", "Hostel Name": "Boys Hostel", "Occupancy": 120, "Max Capacity": 150,
         "Fee per Student": 150000, "Last Year Fee per Student": 135000},
        {"Hostel ID": "H-GIRLS", "Hostel Name": "Girls Hostel", "Occupancy": 80, "Max Capacity": 80,
         "Fee per Student": 160000, "Last Year Fee per Student": 145000},
    ])


def default_settings() -> GlobalSettings:
    return GlobalSettings(
        fee_hike=DEFAULT_FEE_HIKE,
        student_growth=DEFAULT_STUDENT_GROWTH,
        global_discount=DEFAULT_GLOBAL_DISCOUNT,
        school_annual_fee=DEFAULT_SCHOOL_ANNUAL_FEE,
        hostel_annual_fee=DEFAULT_HOSTEL_ANNUAL_FEE,
        school_dcp=DEFAULT_SCHOOL_DCP,
        admission_fee=DEFAULT_ADMISSION_FEE,
    )


def generate_sample_state() -> SimulationState:
    """The default scenario: sample campuses, hostels and default settings."""
    return normalize_state(SimulationState(
        campuses=parse_campuses(generate_campuses_df(), generate_classes_df()),
        hostels=parse_hostels(generate_hostels_df()),
        settings=default_settings(),
    ))


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_campuses_df().to_csv(os.path.join(output_dir, "campuses.csv"), index=False)
    generate_classes_df().to_csv(os.path.join(output_dir, "classes.csv"), index=False)
    generate_hostels_df().to_csv(os.path.join(output_dir, "hostels.csv"), index=False)


def generate_sample_excel(output_dir: str):
    """Write a single multi-tab Excel file with all three datasets."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_data.xlsx")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_campuses_df().to_excel(writer, sheet_name="Campuses", index=False)
        generate_classes_df().to_excel(writer, sheet_name="Classes", index=False)
        generate_hostels_df().to_excel(writer, sheet_name="Hostels", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")
