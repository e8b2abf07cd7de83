"""CSV, Excel and PDF exports of a simulation report."""

import io
import logging
import numbers
from datetime import datetime
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from models.calculation import SimulationResult
from models.settings import GlobalSettings
from engine.report import (
    build_campus_overview, build_class_table, build_executive_summary, build_hostel_table, build_report,
    build_settings_table,
)
from config.defaults import REPORT_BRAND, REPORT_TITLE

logger = logging.getLogger(__name__)

# Excel limits sheet names to 31 characters and forbids a few characters
_INVALID_SHEET_CHARS = set('[]:*?/\\')


def _sheet_name(name: str, used: set) -> str:
    clean = "".join("_" if ch in _INVALID_SHEET_CHARS else ch for ch in name)[:31] or "Sheet"
    candidate, n = clean, 2
    while candidate.lower() in used:
        suffix = f" ({n})"
        candidate = clean[:31 - len(suffix)] + suffix
        n += 1
    used.add(candidate.lower())
    return candidate


def export_csv(result: SimulationResult, settings: GlobalSettings) -> str:
    """All report tables in one CSV text, each preceded by its title line."""
    tables = build_report(result, settings)
    buffer = io.StringIO()
    buffer.write(f"{REPORT_BRAND} - {REPORT_TITLE}\n")
    buffer.write(f"Generated,{datetime.now():%Y-%m-%d %H:%M}\n")
    for title, df in tables.items():
        buffer.write(f"\n{title}\n")
        df.to_csv(buffer, index=False)
    logger.info("Exported CSV report with %d tables", len(tables))
    return buffer.getvalue()


def export_excel(result: SimulationResult, settings: GlobalSettings) -> bytes:
    """Workbook with the summary tables plus one class sheet per campus."""
    tables: Dict[str, pd.DataFrame] = build_report(result, settings)
    classes = build_class_table(result)
    used = set()

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for title, df in tables.items():
            df.to_excel(writer, sheet_name=_sheet_name(title, used), index=False)
        for campus in result.campuses:
            campus_rows = classes[classes["Campus"] == campus.short_name] if not classes.empty else classes
            campus_rows.to_excel(writer, sheet_name=_sheet_name(campus.short_name, used), index=False)

    logger.info("Exported Excel report: %d summary sheets, %d campus sheets", len(tables), len(result.campuses))
    return buffer.getvalue()


# Column subsets that fit a landscape A4 page
PDF_CAMPUS_COLUMNS = [
    "Campus", "Current Students", "Projected Students", "Max Capacity", "Utilization (%)",
    "Discount (%)", "Current Net", "Projected Net", "Revenue Change", "Revenue Change (%)",
]
PDF_HOSTEL_COLUMNS = [
    "Hostel", "Occupancy", "Max Capacity", "Utilization (%)", "Last Year Fee", "Fee per Student",
    "Current Revenue", "Projected Revenue", "Revenue Change",
]

_PDF_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 8),
    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.beige]),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
])


def _pdf_cell(value) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, numbers.Integral):
        return f"{value:,}"
    if isinstance(value, numbers.Real):
        if abs(value) >= 1000 or float(value).is_integer():
            return f"{value:,.0f}"
        return f"{value:,.1f}"
    return str(value)


def _pdf_table(df: pd.DataFrame, columns: Optional[List[str]] = None) -> Table:
    if columns is not None:
        df = df[columns]
    rows = [list(df.columns)] + [[_pdf_cell(v) for v in record.values()] for record in df.to_dict("records")]
    table = Table(rows, repeatRows=1)
    table.setStyle(_PDF_TABLE_STYLE)
    return table


def export_pdf(result: SimulationResult, settings: GlobalSettings) -> bytes:
    """Landscape A4 report: cover, executive summary, settings, campuses and hostels."""
    styles = getSampleStyleSheet()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=landscape(A4),
        topMargin=1.5 * cm, bottomMargin=1.5 * cm, leftMargin=1.5 * cm, rightMargin=1.5 * cm,
        title=REPORT_TITLE, author=REPORT_BRAND,
    )

    story = [
        Spacer(1, 4 * cm),
        Paragraph(escape(REPORT_BRAND), styles["Title"]),
        Paragraph(escape(REPORT_TITLE), styles["Heading2"]),
        Spacer(1, 0.5 * cm),
        Paragraph(f"Generated on {datetime.now():%Y-%m-%d %H:%M}", styles["Normal"]),
        Paragraph(
            f"{len(result.campuses)} campuses, {len(result.hostels)} hostels", styles["Normal"]
        ),
        PageBreak(),
        Paragraph("Executive Summary", styles["Heading1"]),
        _pdf_table(build_executive_summary(result)),
        Spacer(1, 0.8 * cm),
        Paragraph("Global Settings", styles["Heading2"]),
        _pdf_table(build_settings_table(settings)),
        PageBreak(),
        Paragraph("All Campuses Overview", styles["Heading1"]),
    ]

    campuses = build_campus_overview(result)
    if campuses.empty:
        story.append(Paragraph("No campuses loaded.", styles["Normal"]))
    else:
        story.append(_pdf_table(campuses, PDF_CAMPUS_COLUMNS))

    story.append(Spacer(1, 0.8 * cm))
    story.append(Paragraph("Hostels", styles["Heading1"]))
    hostels = build_hostel_table(result)
    if hostels.empty:
        story.append(Paragraph("No hostels loaded.", styles["Normal"]))
    else:
        story.append(_pdf_table(hostels, PDF_HOSTEL_COLUMNS))

    doc.build(story)
    logger.info("Exported PDF report: %d campuses, %d hostels", len(result.campuses), len(result.hostels))
    return buffer.getvalue()
