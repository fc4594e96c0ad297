"""Route database webhook events to role assignment or report analysis."""

import logging
from typing import Any

from pydantic import ValidationError

from health_analyzer.config import HISTORY_WINDOW_DAYS
from health_analyzer.errors import HealthAnalyzerError, WebhookPayloadError
from health_analyzer.pipeline.graph import run_report_analysis
from health_analyzer.roles import assign_role
from health_analyzer.schemas.webhook import WebhookEvent

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Webhook processed successfully"


def parse_event(payload: Any) -> WebhookEvent:
    if not isinstance(payload, dict):
        raise WebhookPayloadError("Webhook payload must be a JSON object")
    try:
        return WebhookEvent.model_validate(payload)
    except ValidationError as e:
        raise WebhookPayloadError(f"Invalid webhook payload: {e}") from e


def _require_record_and_store(event: WebhookEvent, store) -> dict:
    if event.record is None:
        raise WebhookPayloadError("INSERT event without a record")
    if store is None:
        raise HealthAnalyzerError("Supabase not configured. Set SUPABASE_URL and SUPABASE_SERVICE_KEY.")
    return event.record


def dispatch_event(
    payload: Any,
    store,
    weather_client,
    sms_client,
    alert_recipient: str,
) -> str:
    """
    Handle one webhook event and return the success message.

    INSERT on profiles runs role assignment, INSERT on reports runs the
    analysis pipeline; anything else is acknowledged without work, even
    when no store is configured. Errors from the routed handler propagate
    to the caller.
    """
    event = parse_event(payload)
    logger.info("Webhook received %s on %s", event.type, event.table)

    if event.type == "INSERT" and event.table == "profiles":
        assign_role(_require_record_and_store(event, store), store)
    elif event.type == "INSERT" and event.table == "reports":
        run_report_analysis(
            _require_record_and_store(event, store),
            store,
            weather_client,
            sms_client,
            alert_recipient,
            window_days=HISTORY_WINDOW_DAYS,
        )
    else:
        logger.info("No handler for %s on %s; ignoring", event.type, event.table)

    return SUCCESS_MESSAGE
