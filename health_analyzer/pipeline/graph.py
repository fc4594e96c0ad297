"""LangGraph pipeline that scores a new report, persists the result and alerts."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, TypedDict

from langgraph.graph import END, START, StateGraph

from health_analyzer.alerts.push import dispatch_alert
from health_analyzer.errors import DataSourceError
from health_analyzer.geolocation import extract_coordinates
from health_analyzer.schemas.assessment import RiskAssessment
from health_analyzer.schemas.report import Coordinates, Report
from health_analyzer.scoring.classifier import classify_score
from health_analyzer.scoring.features import score_demographic, score_severity, score_water_source
from health_analyzer.scoring.trend import analyze_trend
from health_analyzer.scoring.weather import fetch_weather, score_weather

logger = logging.getLogger(__name__)


class ReportState(TypedDict, total=False):
    """State for the report analysis pipeline."""

    record: dict
    report: Report
    coordinates: Coordinates | None
    assessment: RiskAssessment
    persisted: bool
    alert_sent: bool


def _load_report(record: dict, store) -> Report:
    """Prefer the store's normalized view of the report; fall back to the webhook record."""
    view = None
    if record.get("id") is not None:
        try:
            view = store.fetch_report_view(record["id"])
        except DataSourceError as e:
            logger.error("Error fetching report details with RPC: %s", e)
    if not view:
        return Report.model_validate(record)
    # Columns missing from the view are taken from the webhook record
    return Report.model_validate({**record, **view})


def create_graph(
    store,
    weather_client,
    sms_client,
    alert_recipient: str,
    window_days: int = 7,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> StateGraph:
    """Build the pipeline with its collaborators bound into the nodes."""

    def load_node(state: ReportState) -> ReportState:
        report = _load_report(state["record"], store)
        logger.info("Analyzing new report ID: %s for village: %s", report.id, report.village_name)
        return {
            "report": report,
            "coordinates": extract_coordinates(report),
            "assessment": RiskAssessment(),
        }

    def trend_node(state: ReportState) -> ReportState:
        signal = analyze_trend(state["report"], store, window_days=window_days, clock=clock)
        return {"assessment": state["assessment"].apply(signal)}

    def demographic_node(state: ReportState) -> ReportState:
        return {"assessment": state["assessment"].apply(score_demographic(state["report"]))}

    def severity_node(state: ReportState) -> ReportState:
        return {"assessment": state["assessment"].apply(score_severity(state["report"]))}

    def environmental_node(state: ReportState) -> ReportState:
        return {"assessment": state["assessment"].apply(score_water_source(state["report"]))}

    def weather_node(state: ReportState) -> ReportState:
        reading = fetch_weather(state.get("coordinates"), weather_client)
        assessment = state["assessment"].with_weather(reading.snapshot).apply(score_weather(reading))
        return {"assessment": assessment}

    def classify_node(state: ReportState) -> ReportState:
        assessment = state["assessment"]
        assessment = assessment.with_tier(classify_score(assessment.score))
        logger.info(
            "Final determination for report %s: Risk Level = %s (score %d)",
            state["report"].id,
            assessment.tier,
            assessment.score,
        )
        return {"assessment": assessment}

    def persist_node(state: ReportState) -> ReportState:
        report, assessment = state["report"], state["assessment"]
        fields = {
            "risk_level": assessment.tier,
            "weather_snapshot": assessment.weather_snapshot,
            "analysis_notes": assessment.notes_text,
        }
        try:
            store.update_report(report.id, fields)
        except DataSourceError as e:
            logger.error("Error updating report in database: %s", e)
            return {"persisted": False}
        logger.info("Successfully updated report %s in the database.", report.id)
        return {"persisted": True}

    def alert_node(state: ReportState) -> ReportState:
        sent = dispatch_alert(state["assessment"], state["report"], sms_client, alert_recipient)
        return {"alert_sent": sent}

    graph = StateGraph(ReportState)

    graph.add_node("load", load_node)
    graph.add_node("trend", trend_node)
    graph.add_node("demographic", demographic_node)
    graph.add_node("severity", severity_node)
    graph.add_node("environmental", environmental_node)
    graph.add_node("weather", weather_node)
    graph.add_node("classify", classify_node)
    graph.add_node("persist", persist_node)
    graph.add_node("alert", alert_node)

    graph.add_edge(START, "load")
    graph.add_edge("load", "trend")
    graph.add_edge("trend", "demographic")
    graph.add_edge("demographic", "severity")
    graph.add_edge("severity", "environmental")
    graph.add_edge("environmental", "weather")
    graph.add_edge("weather", "classify")
    graph.add_edge("classify", "persist")
    graph.add_edge("persist", "alert")
    graph.add_edge("alert", END)

    return graph


def run_report_analysis(
    record: dict,
    store,
    weather_client,
    sms_client,
    alert_recipient: str,
    **graph_options: Any,
) -> ReportState:
    """Compile and run the pipeline for one inserted report row."""
    g = create_graph(store, weather_client, sms_client, alert_recipient, **graph_options)
    app = g.compile()
    return app.invoke({"record": record})
