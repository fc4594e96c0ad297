"""Case velocity against the village's recent history."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from health_analyzer.errors import DataSourceError
from health_analyzer.schemas.assessment import Signal
from health_analyzer.schemas.report import Report

logger = logging.getLogger(__name__)

VELOCITY_MULTIPLIER = 3
VELOCITY_POINTS = 40


def history_window(
    report: Report, now: datetime, window_days: int
) -> tuple[datetime, datetime]:
    """``[now - window_days, report.created_at)``; falls back to ``now`` for the upper edge."""
    end = report.created_at or now
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    return now - timedelta(days=window_days), end


def score_trend(current_cases: int, history: list[int]) -> Signal | None:
    """Flag a report whose diarrhea count exceeds 3x the historical mean."""
    if not history:
        return None
    mean = sum(history) / len(history)
    if mean > 0 and current_cases > mean * VELOCITY_MULTIPLIER:
        return Signal(VELOCITY_POINTS, "Case velocity is high (3x historical average).")
    return None


def analyze_trend(
    report: Report,
    store,
    window_days: int = 7,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> Signal | None:
    """Query prior reports and score velocity. A failed query counts as no history."""
    start, end = history_window(report, clock(), window_days)
    try:
        history = store.fetch_diarrhea_counts(report.village_name, start, end)
    except DataSourceError as e:
        logger.error("Error fetching historical data: %s", e)
        return None
    logger.info(
        "Report %s: %d prior report(s) for %r in window", report.id, len(history), report.village_name
    )
    return score_trend(report.diarrhea_cases, history)
