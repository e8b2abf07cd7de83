"""Tests for CSV, Excel and PDF report export."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import io

import pandas as pd

from models.campus import CampusData, ClassData
from models.hostel import HostelData
from models.settings import GlobalSettings
from models.state import SimulationState
from engine.scenario_engine import run_simulation
from data.exporter import _pdf_cell, _sheet_name, export_csv, export_excel, export_pdf


def make_state():
    return SimulationState(
        campuses=[
            CampusData("C1", "Campus One", "North", 120, discount_rate=10,
                       classes=[ClassData("Grade 5", 70, 300000, 30, 350000)]),
            CampusData("C2", "Campus Two", "South", 100, discount_rate=12,
                       classes=[ClassData("Grade 1", 40, 180000, 20, 200000),
                                ClassData("Grade 2", 35, 190000, 5, 210000)]),
        ],
        hostels=[HostelData("H1", "Hostel", 20, 40, 100000)],
        settings=GlobalSettings(fee_hike=5, student_growth=8),
    )


class TestSheetName:
    def test_invalid_characters_replaced(self):
        assert _sheet_name("Grade 1/2: Boys", set()) == "Grade 1_2_ Boys"

    def test_truncated_to_excel_limit(self):
        assert len(_sheet_name("A" * 40, set())) == 31

    def test_duplicates_are_numbered(self):
        used = set()
        assert _sheet_name("Classes", used) == "Classes"
        assert _sheet_name("classes", used) == "classes (2)"
        assert _sheet_name("CLASSES", used) == "CLASSES (3)"


class TestExportCsv:
    def test_contains_every_table(self):
        text = export_csv(run_simulation(make_state()), make_state().settings)
        lines = text.splitlines()

        assert "Revenue Forecasting Report" in lines[0]
        assert lines[1].startswith("Generated,")
        for title in ("Executive Summary", "Campuses", "Classes", "Hostels", "Settings"):
            assert title in lines
        assert any(line.startswith("Grand Total,") for line in lines)


class TestExportExcel:
    def test_sheets(self):
        content = export_excel(run_simulation(make_state()), make_state().settings)
        xl = pd.ExcelFile(io.BytesIO(content), engine="openpyxl")

        assert xl.sheet_names == [
            "Executive Summary", "Campuses", "Classes", "Hostels", "Settings", "North", "South",
        ]

    def test_campus_sheet_has_its_classes(self):
        content = export_excel(run_simulation(make_state()), make_state().settings)
        south = pd.read_excel(io.BytesIO(content), sheet_name="South", engine="openpyxl")
        assert south["Class"].tolist() == ["Grade 1", "Grade 2"]

    def test_campus_named_like_a_report_sheet(self):
        state = make_state()
        state.campuses[0] = CampusData("C1", "Campus One", "Classes", 120,
                                       classes=[ClassData("Grade 5", 70, 300000, 30, 350000)])
        content = export_excel(run_simulation(state), state.settings)
        assert "Classes (2)" in pd.ExcelFile(io.BytesIO(content), engine="openpyxl").sheet_names


class TestExportPdf:
    def test_is_a_pdf_document(self):
        content = export_pdf(run_simulation(make_state()), make_state().settings)
        assert isinstance(content, bytes)
        assert content.startswith(b"%PDF")
        assert content.rstrip().endswith(b"%%EOF")

    def test_empty_scenario(self):
        state = SimulationState()
        content = export_pdf(run_simulation(state), state.settings)
        assert content.startswith(b"%PDF")

    def test_markup_characters_in_names(self):
        state = make_state()
        state.campuses[0] = CampusData("C1", "Boys & Girls <Main>", "B&G", 120,
                                       classes=[ClassData("Grade 5", 70, 300000, 30, 350000)])
        assert export_pdf(run_simulation(state), state.settings).startswith(b"%PDF")

    def test_cell_formatting(self):
        assert _pdf_cell(True) == "Yes"
        assert _pdf_cell(1200) == "1,200"
        assert _pdf_cell(32_130_000.4) == "32,130,000"
        assert _pdf_cell(90.04) == "90.0"
        assert _pdf_cell(10.0) == "10"
        assert _pdf_cell("North") == "North"


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
