"""Send alert SMS through Twilio's Messages API."""

import logging

import requests

from health_analyzer.alerts.transformer import render_alert_message, should_alert
from health_analyzer.errors import SmsProviderError
from health_analyzer.schemas.assessment import RiskAssessment
from health_analyzer.schemas.report import Report
from health_analyzer.utils.logging import Timer, log_external_call

logger = logging.getLogger(__name__)


class TwilioClient:
    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        base_url: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10,
        session=None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    def send(self, to: str, body: str) -> dict:
        """POST a message. Raises SmsProviderError on non-2xx, requests.RequestException on transport failure."""
        url = f"{self.base_url}/Accounts/{self.account_sid}/Messages.json"
        with Timer() as timer:
            try:
                resp = self.session.post(
                    url,
                    auth=(self.account_sid, self.auth_token),
                    data={"To": to, "From": self.from_number, "Body": body},
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                failure = e
            else:
                failure = None
        if failure is not None:
            log_external_call("twilio", "send_sms", timer.elapsed_ms, ok=False, error=str(failure))
            raise failure

        try:
            payload = resp.json()
        except ValueError:
            payload = resp.text
        if not resp.ok:
            log_external_call("twilio", "send_sms", timer.elapsed_ms, ok=False, error=str(payload))
            raise SmsProviderError(resp.status_code, payload)

        log_external_call("twilio", "send_sms", timer.elapsed_ms)
        return payload if isinstance(payload, dict) else {}


def get_sms_client() -> TwilioClient:
    from health_analyzer.config import (
        SMS_REQUEST_TIMEOUT,
        TWILIO_ACCOUNT_SID,
        TWILIO_AUTH_TOKEN,
        TWILIO_BASE_URL,
        TWILIO_PHONE_NUMBER,
    )

    return TwilioClient(
        TWILIO_ACCOUNT_SID,
        TWILIO_AUTH_TOKEN,
        TWILIO_PHONE_NUMBER,
        base_url=TWILIO_BASE_URL,
        timeout=SMS_REQUEST_TIMEOUT,
    )


def dispatch_alert(
    assessment: RiskAssessment,
    report: Report,
    client: TwilioClient,
    recipient: str,
) -> bool:
    """
    Send an SMS for High/Critical assessments.

    Returns True when the provider accepted the message. Failures are logged
    and never raised.
    """
    if not should_alert(assessment):
        return False

    logger.info("%s risk detected for report %s. Sending SMS alert via Twilio...", assessment.tier, report.id)
    if not client.configured or not recipient:
        logger.warning("Twilio or HEALTH_OFFICIAL_PHONE_NUMBER not configured; alert skipped")
        return False

    message = render_alert_message(assessment, report)
    try:
        client.send(recipient, message)
    except SmsProviderError as e:
        logger.error("Failed to send Twilio SMS: %s", e)
        return False
    except requests.RequestException as e:
        logger.error("Error sending Twilio SMS: %s", e)
        return False

    logger.info("SMS alert sent successfully.")
    return True
