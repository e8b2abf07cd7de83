"""Tests for file parsing into model objects."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import io
import logging

import pandas as pd
import pytest

from models.settings import CustomFee, GlobalSettings
from engine.report import build_settings_table
from data.loader import (
    load_file, load_multi_sheet_excel, parse_campuses, parse_classes, parse_hostels, parse_settings,
)


def make_campus_df(**overrides):
    row = {
        "Campus ID": "C1",
        "Campus Name": "Campus One",
        "Max Capacity": 200,
        "Renewal Fee Hike (%)": 2,
        "New Admission Fee Hike (%)": 3,
        "Renewal Growth (%)": 0,
        "New Student Growth (%)": 5,
        "Discount (%)": 12,
    }
    row.update(overrides)
    return pd.DataFrame([row])


def make_class_df():
    return pd.DataFrame([
        {"Campus ID": "C1", "Class": "Grade 1", "Renewal Students": 40, "Renewal Fee": 180000,
         "New Students": 10, "New Admission Fee": 200000, "Forecast Renewal Students": float("nan")},
        {"Campus ID": "C1", "Class": "Grade 2", "Renewal Students": 35, "Renewal Fee": 190000,
         "New Students": 5, "New Admission Fee": 210000, "Forecast Renewal Students": 38},
        {"Campus ID": "C2", "Class": "Grade 1", "Renewal Students": 20, "Renewal Fee": 150000,
         "New Students": 4, "New Admission Fee": 160000, "Forecast Renewal Students": float("nan")},
    ])


def excel_bytes(sheets):
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for name, df in sheets.items():
            df.to_excel(writer, sheet_name=name, index=False)
    buffer.seek(0)
    return buffer


class TestParseClasses:
    def test_grouped_by_campus(self):
        by_campus = parse_classes(make_class_df())
        assert sorted(by_campus) == ["C1", "C2"]
        assert [c.class_name for c in by_campus["C1"]] == ["Grade 1", "Grade 2"]

    def test_forecast_overrides(self):
        grade_1, grade_2 = parse_classes(make_class_df())["C1"]
        assert grade_1.forecast_renewal_count is None
        assert grade_2.forecast_renewal_count == 38
        assert grade_2.forecast_new_admission_count is None


class TestParseCampuses:
    def test_basic_fields(self):
        campus = parse_campuses(make_campus_df(), make_class_df())[0]
        assert campus.campus_id == "C1"
        assert campus.short_name == "Campus One"
        assert campus.max_capacity == 200
        assert campus.new_student_growth == 5
        assert len(campus.classes) == 2
        assert campus.annual_fee_applicable

    def test_missing_last_year_discount_falls_back(self):
        campus = parse_campuses(make_campus_df(), make_class_df())[0]
        assert campus.last_year_discount == 12

    def test_explicit_last_year_discount_and_flags(self):
        df = make_campus_df(**{"Last Year Discount (%)": 10, "Short Name": "ONE", "Annual Fee Applicable": "No"})
        campus = parse_campuses(df, make_class_df())[0]
        assert campus.last_year_discount == 10
        assert campus.short_name == "ONE"
        assert not campus.annual_fee_applicable

    def test_non_numeric_becomes_zero(self):
        campus = parse_campuses(make_campus_df(**{"Max Capacity": "n/a"}), make_class_df())[0]
        assert campus.max_capacity == 0

    def test_campus_without_classes(self):
        campus = parse_campuses(make_campus_df(**{"Campus ID": "C9"}), make_class_df())[0]
        assert campus.classes == []


class TestParseHostels:
    def test_last_year_fee_optional(self):
        df = pd.DataFrame([
            {"Hostel ID": "H1", "Hostel Name": "Boys", "Occupancy": 50, "Max Capacity": 60,
             "Fee per Student": 150000, "Last Year Fee per Student": 140000},
            {"Hostel ID": "H2", "Hostel Name": "Girls", "Occupancy": 30, "Max Capacity": 40,
             "Fee per Student": 160000, "Last Year Fee per Student": float("nan")},
        ])
        boys, girls = parse_hostels(df)
        assert boys.last_year_fee_per_student == 140000
        assert girls.last_year_fee_per_student == 160000


class TestParseSettings:
    def test_known_parameters(self):
        df = pd.DataFrame({"Parameter": ["Fee Hike (%)", "School DCP"], "Value": [5, 12000]})
        settings = parse_settings(df)
        assert settings.fee_hike == 5
        assert settings.school_dcp == 12000
        assert settings.last_year_school_dcp == 12000

    def test_unknown_parameter_is_skipped(self, caplog):
        df = pd.DataFrame({"Parameter": ["Bogus Setting", "student growth (%)"], "Value": [1, 4]})
        with caplog.at_level(logging.WARNING):
            settings = parse_settings(df)
        assert settings.student_growth == 4
        assert "Bogus Setting" in caplog.text

    def test_base_settings_kept(self):
        df = pd.DataFrame({"Parameter": ["Fee Hike (%)"], "Value": [3]})
        settings = parse_settings(df, base=GlobalSettings(admission_fee=30000))
        assert settings.admission_fee == 30000
        assert settings.fee_hike == 3

    def test_custom_fee_rows(self):
        df = pd.DataFrame({
            "Parameter": ["Custom: Sports (School/Hostel)", "Custom: Laundry (Hostel)", "custom: Lab"],
            "Value": [5000, 2000, 3000],
        })
        sports, laundry, lab = parse_settings(df).custom_fees

        assert (sports.name, sports.amount, sports.applies_to_school, sports.applies_to_hostel) == \
            ("Sports", 5000, True, True)
        assert (laundry.applies_to_school, laundry.applies_to_hostel) == (False, True)
        assert laundry.amount == 2000
        assert (lab.name, lab.applies_to_school, lab.applies_to_hostel) == ("Lab", True, False)
        assert lab.last_year_amount == 3000
        assert len({sports.fee_id, laundry.fee_id, lab.fee_id}) == 3

    def test_custom_fee_updates_same_name(self):
        base = GlobalSettings(custom_fees=[CustomFee("f1", "Sports", 4000, last_year_amount=3500)])
        df = pd.DataFrame({"Parameter": ["Custom: sports (Hostel)"], "Value": [4500]})
        (fee,) = parse_settings(df, base=base).custom_fees

        assert fee.fee_id == "f1"
        assert fee.name == "Sports"
        assert fee.amount == 4500
        assert fee.last_year_amount == 3500
        assert (fee.applies_to_school, fee.applies_to_hostel) == (False, True)

    def test_custom_fee_unknown_scope_skipped(self, caplog):
        df = pd.DataFrame({"Parameter": ["Custom: Bus (Staff)"], "Value": [100]})
        with caplog.at_level(logging.WARNING):
            settings = parse_settings(df)
        assert settings.custom_fees == []
        assert "Custom: Bus (Staff)" in caplog.text

    def test_settings_table_reloads(self):
        settings = GlobalSettings(school_dcp=10000, custom_fees=[
            CustomFee("f1", "Sports", 5000, applies_to_hostel=True),
            CustomFee("f2", "Trips", 800, applies_to_school=False),
        ])
        reloaded = parse_settings(build_settings_table(settings))

        assert reloaded.school_dcp == 10000
        assert [(f.name, f.amount, f.applies_to_school, f.applies_to_hostel) for f in reloaded.custom_fees] == [
            ("Sports", 5000, True, True), ("Trips", 800, False, False),
        ]


class TestLoadFile:
    def test_csv(self):
        buffer = io.BytesIO(make_campus_df().to_csv(index=False).encode("utf-8"))
        buffer.name = "campuses.csv"
        df = load_file(buffer)
        assert df.loc[0, "Campus ID"] == "C1"

    def test_unsupported_extension(self):
        buffer = io.BytesIO(b"")
        buffer.name = "campuses.txt"
        with pytest.raises(ValueError, match="Unsupported file format"):
            load_file(buffer)


class TestLoadMultiSheetExcel:
    def test_sheet_aliases_and_optional_sheets(self):
        buffer = excel_bytes({"Campus Master": make_campus_df(), "Class Data": make_class_df()})
        campus_df, class_df, hostel_df, settings_df = load_multi_sheet_excel(buffer)

        assert campus_df.loc[0, "Campus ID"] == "C1"
        assert len(class_df) == 3
        assert hostel_df is None
        assert settings_df is None

    def test_missing_required_sheet(self):
        buffer = excel_bytes({"Campuses": make_campus_df(), "Hostels": pd.DataFrame({"a": [1]})})
        with pytest.raises(ValueError, match="classes"):
            load_multi_sheet_excel(buffer)


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
