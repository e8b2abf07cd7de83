"""Default configuration constants for the School Revenue Forecaster."""

import os

# Global scenario parameters (percentages are plain numbers: 5 means 5%)
DEFAULT_FEE_HIKE = 0.0
DEFAULT_STUDENT_GROWTH = 0.0
DEFAULT_GLOBAL_DISCOUNT = 15.0

# Ancillary per-student fees (PKR)
DEFAULT_SCHOOL_ANNUAL_FEE = 25000
DEFAULT_HOSTEL_ANNUAL_FEE = 15000
DEFAULT_SCHOOL_DCP = 10000
DEFAULT_ADMISSION_FEE = 25000

# Slider bounds for rate controls
RATE_SLIDER_MIN = -15
RATE_SLIDER_MAX = 40
DISCOUNT_SLIDER_MIN = 0
DISCOUNT_SLIDER_MAX = 40

# Executive summary
TOP_CAMPUS_COUNT = 5

# Utilization above this (as a percent) is flagged as near capacity
NEAR_CAPACITY_THRESHOLD = 90.0

# Currency and report labels
CURRENCY_SYMBOL = "Rs."
CURRENCY_SHORT_SYMBOL = "₨"
REPORT_BRAND = "Pak Turk Maarif School & Colleges"
REPORT_TITLE = "Revenue Forecasting Report"

# Saved scenario snapshots (JSON files)
SCENARIO_STORE_DIR = os.environ.get(
    "REVENUE_SCENARIO_DIR",
    os.path.join(os.path.expanduser("~"), ".school_revenue_forecaster", "scenarios"),
)

# Logging
LOG_LEVEL = os.environ.get("REVENUE_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
