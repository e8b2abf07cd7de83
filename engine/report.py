"""Tabular views of a simulation result for display and export.

Every table is built from engine output only; no rate math happens here.
Unit fees are rounded for display, totals are left as computed.
"""

from typing import Dict, List

import pandas as pd

from models.calculation import SimulationResult
from models.settings import GlobalSettings
from engine.normalizer import normalize_settings


def build_executive_summary(result: SimulationResult) -> pd.DataFrame:
    t = result.totals
    fees = t.additional_fees
    rows = [
        ("School Students", t.current_school_students, t.projected_school_students),
        ("Renewal Students", t.current_renewal_students, t.projected_renewal_students),
        ("New Admissions", t.current_new_students, t.projected_new_students),
        ("Hostel Students", t.hostel_students, t.hostel_students),
        ("Gross School Tuition", t.current_gross_revenue, t.projected_gross_revenue),
        ("Discount Amount", t.current_discount_amount, t.projected_discount_amount),
        ("Net School Tuition", t.current_school_revenue, t.projected_school_revenue),
        ("Hostel Revenue", t.current_hostel_revenue, t.projected_hostel_revenue),
        ("Total Tuition", t.current_tuition_revenue, t.projected_tuition_revenue),
        ("Annual Fees", fees.current_annual_fee_total, fees.projected_annual_fee_total),
        ("DCP", fees.current_dcp_total, fees.projected_dcp_total),
        ("Admission Fees", fees.current_admission_fee_total, fees.projected_admission_fee_total),
        ("Custom Fees", fees.current_custom_fee_total, fees.projected_custom_fee_total),
        ("Grand Total", t.current_grand_total, t.projected_grand_total),
    ]
    return pd.DataFrame([
        {"Metric": label, "Current": current, "Projected": projected, "Change": projected - current}
        for label, current, projected in rows
    ])


def build_campus_overview(result: SimulationResult) -> pd.DataFrame:
    rows = []
    for c in result.campuses:
        rows.append({
            "Campus ID": c.campus_id,
            "Campus": c.campus_name,
            "Short Name": c.short_name,
            "Current Students": c.current_total_students,
            "Projected Students": c.projected_total_students,
            "Max Capacity": c.max_capacity,
            "Utilization (%)": round(c.capacity_utilization, 1),
            "Over Capacity": c.is_over_capacity,
            "Last Year Discount (%)": c.current_discount_rate,
            "Discount (%)": c.projected_discount_rate,
            "Current Gross": c.current_gross_revenue,
            "Projected Gross": c.projected_gross_revenue,
            "Current Net": c.current_net_revenue,
            "Projected Net": c.projected_net_revenue,
            "Revenue Change": c.revenue_change,
            "Revenue Change (%)": round(c.revenue_change_percent, 1),
        })
    return pd.DataFrame(rows)


def build_class_table(result: SimulationResult, include_inactive: bool = False) -> pd.DataFrame:
    rows = []
    for campus, cls in result.all_classes(include_inactive=include_inactive):
        rows.append({
            "Campus": campus.short_name,
            "Class": cls.class_name,
            "Renewal Students": cls.renewal.current_count,
            "Projected Renewal": cls.renewal.projected_count,
            "Renewal Fee": round(cls.renewal.current_fee),
            "Projected Renewal Fee": round(cls.renewal.projected_fee),
            "New Students": cls.new_admission.current_count,
            "Projected New": cls.new_admission.projected_count,
            "New Admission Fee": round(cls.new_admission.current_fee),
            "Projected New Fee": round(cls.new_admission.projected_fee),
            "Override": cls.renewal.is_overridden or cls.new_admission.is_overridden,
            "Current Revenue": cls.current_revenue,
            "Projected Revenue": cls.projected_revenue,
            "Revenue Change": cls.revenue_change,
        })
    return pd.DataFrame(rows)


def build_hostel_table(result: SimulationResult) -> pd.DataFrame:
    rows = []
    for h in result.hostels:
        rows.append({
            "Hostel ID": h.hostel_id,
            "Hostel": h.hostel_name,
            "Occupancy": h.current_occupancy,
            "Max Capacity": h.max_capacity,
            "Available Beds": h.available_beds,
            "Utilization (%)": round(h.utilization_percent, 1),
            "Last Year Fee": round(h.current_fee_per_student),
            "Fee per Student": round(h.projected_fee_per_student),
            "Current Revenue": h.current_revenue,
            "Projected Revenue": h.projected_revenue,
            "Revenue Change": h.revenue_change,
        })
    return pd.DataFrame(rows)


def build_settings_table(settings: GlobalSettings) -> pd.DataFrame:
    s = normalize_settings(settings)
    rows: List[dict] = [
        {"Parameter": "Fee Hike (%)", "Value": s.fee_hike},
        {"Parameter": "Student Growth (%)", "Value": s.student_growth},
        {"Parameter": "Renewal Fee Hike Adj. (%)", "Value": s.renewal_fee_hike},
        {"Parameter": "New Admission Fee Hike Adj. (%)", "Value": s.new_admission_fee_hike},
        {"Parameter": "Renewal Growth Adj. (%)", "Value": s.renewal_growth},
        {"Parameter": "New Student Growth Adj. (%)", "Value": s.new_student_growth},
        {"Parameter": "Global Discount (%)", "Value": s.global_discount},
        {"Parameter": "School Annual Fee", "Value": s.school_annual_fee},
        {"Parameter": "Last Year School Annual Fee", "Value": s.last_year_school_annual_fee},
        {"Parameter": "Hostel Annual Fee", "Value": s.hostel_annual_fee},
        {"Parameter": "Last Year Hostel Annual Fee", "Value": s.last_year_hostel_annual_fee},
        {"Parameter": "School DCP", "Value": s.school_dcp},
        {"Parameter": "Last Year School DCP", "Value": s.last_year_school_dcp},
        {"Parameter": "Admission Fee", "Value": s.admission_fee},
        {"Parameter": "Last Year Admission Fee", "Value": s.last_year_admission_fee},
    ]
    for fee in s.custom_fees:
        scope = "/".join(
            label for label, on in (("School", fee.applies_to_school), ("Hostel", fee.applies_to_hostel)) if on
        ) or "None"
        rows.append({"Parameter": f"Custom: {fee.name} ({scope})", "Value": fee.amount})
    return pd.DataFrame(rows)


def build_report(result: SimulationResult, settings: GlobalSettings) -> Dict[str, pd.DataFrame]:
    """All report tables keyed by sheet name, in workbook order."""
    return {
        "Executive Summary": build_executive_summary(result),
        "Campuses": build_campus_overview(result),
        "Classes": build_class_table(result),
        "Hostels": build_hostel_table(result),
        "Settings": build_settings_table(settings),
    }
