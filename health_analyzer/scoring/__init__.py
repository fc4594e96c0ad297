"""Scoring rules for community health reports."""

from health_analyzer.scoring.classifier import ALERT_TIERS, TIER_POLICY, classify_score
from health_analyzer.scoring.features import score_demographic, score_severity, score_water_source
from health_analyzer.scoring.trend import analyze_trend, score_trend
from health_analyzer.scoring.weather import WeatherClient, WeatherReading, fetch_weather, score_weather

__all__ = [
    "ALERT_TIERS",
    "TIER_POLICY",
    "classify_score",
    "score_demographic",
    "score_severity",
    "score_water_source",
    "analyze_trend",
    "score_trend",
    "WeatherClient",
    "WeatherReading",
    "fetch_weather",
    "score_weather",
]
