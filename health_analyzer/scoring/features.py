"""Per-report scoring rules: demographic, severity and water source.

Each rule looks only at the report and is independent of the others.
"""

from health_analyzer.schemas.assessment import Signal
from health_analyzer.schemas.report import SHARED_WATER_SOURCES, Report

CHILD_CASES_THRESHOLD = 5
CHILD_CASES_POINTS = 50

HIGH_TOTAL_THRESHOLD = 15
HIGH_TOTAL_POINTS = 30
MODERATE_TOTAL_THRESHOLD = 8
MODERATE_TOTAL_POINTS = 15

SHARED_WATER_POINTS = 10


def score_demographic(report: Report) -> Signal | None:
    if report.cases_in_children > CHILD_CASES_THRESHOLD:
        return Signal(CHILD_CASES_POINTS, "High number of cases in children under 5.")
    return None


def score_severity(report: Report) -> Signal | None:
    """Total of diarrhea, fever and vomiting cases; the two bands are exclusive."""
    total = report.total_cases
    if total > HIGH_TOTAL_THRESHOLD:
        return Signal(HIGH_TOTAL_POINTS, "High total case count.")
    if total > MODERATE_TOTAL_THRESHOLD:
        return Signal(MODERATE_TOTAL_POINTS, "Moderate total case count.")
    return None


def score_water_source(report: Report) -> Signal | None:
    source = report.water_source_tested
    if source in SHARED_WATER_SOURCES:
        return Signal(SHARED_WATER_POINTS, f"Shared water source ({source}) adds risk.")
    return None
