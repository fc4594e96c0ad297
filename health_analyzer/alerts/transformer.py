"""Turn a classified risk assessment into SMS alert text."""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from health_analyzer.schemas.assessment import RiskAssessment
from health_analyzer.schemas.report import Report
from health_analyzer.scoring.classifier import ALERT_TIERS

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@lru_cache(maxsize=1)
def _load_template():
    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=False)
    return env.get_template("sms_alert.jinja2")


def should_alert(assessment: RiskAssessment) -> bool:
    return assessment.tier in ALERT_TIERS


def render_alert_message(assessment: RiskAssessment, report: Report) -> str:
    return _load_template().render(
        tier=assessment.tier,
        village_name=report.village_name,
        notes=assessment.notes_text,
    )
