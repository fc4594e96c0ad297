#!/usr/bin/env python3
"""Run the report analysis pipeline for one report record (JSON file or stdin)."""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from health_analyzer.alerts.push import get_sms_client
from health_analyzer.config import HEALTH_OFFICIAL_PHONE_NUMBER, HISTORY_WINDOW_DAYS
from health_analyzer.pipeline import run_report_analysis
from health_analyzer.scoring.weather import get_weather_client
from health_analyzer.store import get_store

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("record", nargs="?", help="Path to a report record JSON file (default: stdin)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    if args.record:
        record = json.loads(Path(args.record).read_text(encoding="utf-8"))
    else:
        record = json.load(sys.stdin)

    result = run_report_analysis(
        record,
        get_store(),
        get_weather_client(),
        get_sms_client(),
        HEALTH_OFFICIAL_PHONE_NUMBER,
        window_days=HISTORY_WINDOW_DAYS,
    )
    assessment = result["assessment"]
    print(json.dumps(
        {
            "report_id": result["report"].id,
            "score": assessment.score,
            "risk_level": assessment.tier,
            "weather_snapshot": assessment.weather_snapshot,
            "analysis_notes": assessment.notes_text,
            "persisted": result.get("persisted", False),
            "alert_sent": result.get("alert_sent", False),
        },
        indent=2,
        ensure_ascii=False,
    ))
