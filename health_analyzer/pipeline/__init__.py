"""LangGraph pipeline for report risk analysis."""

from .graph import create_graph, run_report_analysis

__all__ = ["create_graph", "run_report_analysis"]
