"""Alerts service: render outbreak alerts and send them by SMS (Twilio)."""

from health_analyzer.alerts.push import TwilioClient, dispatch_alert, get_sms_client
from health_analyzer.alerts.transformer import render_alert_message, should_alert

__all__ = [
    "TwilioClient",
    "dispatch_alert",
    "get_sms_client",
    "render_alert_message",
    "should_alert",
]
