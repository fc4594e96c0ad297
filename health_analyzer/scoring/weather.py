"""Current weather at the report location (OpenWeatherMap).

The lookup never raises into the pipeline: provider errors, transport errors
and missing coordinates each map to their own snapshot string.
"""

import logging
from dataclasses import dataclass

import requests

from health_analyzer.errors import WeatherProviderError
from health_analyzer.schemas.assessment import Signal
from health_analyzer.schemas.report import Coordinates
from health_analyzer.utils.logging import Timer, log_external_call

logger = logging.getLogger(__name__)

RAIN_POINTS = 10

FETCH_ERROR = "Fetch Error"
LOCATION_UNRESOLVED = "Location could not be processed"
DEFAULT_PROVIDER_MESSAGE = "Invalid Key?"


@dataclass(frozen=True)
class WeatherReading:
    snapshot: str
    recent_rain: bool = False


class WeatherClient:
    """Thin OpenWeatherMap current-conditions client."""

    def __init__(self, api_key: str, base_url: str, timeout: float = 10, session=None):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def current(self, lat: float, lon: float) -> dict:
        """GET current conditions in metric units.

        Raises WeatherProviderError on a non-2xx answer and
        requests.RequestException on transport failure.
        """
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        with Timer() as timer:
            try:
                resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                failure = e
            else:
                failure = None
        if failure is not None:
            log_external_call("openweather", "current", timer.elapsed_ms, ok=False, error=str(failure))
            raise failure

        if not resp.ok:
            message = _provider_message(resp)
            log_external_call("openweather", "current", timer.elapsed_ms, ok=False, error=message)
            raise WeatherProviderError(resp.status_code, message)

        log_external_call("openweather", "current", timer.elapsed_ms)
        return resp.json()


def _provider_message(resp) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None


def get_weather_client() -> WeatherClient:
    from health_analyzer.config import (
        OPENWEATHER_API_KEY,
        OPENWEATHER_BASE_URL,
        WEATHER_REQUEST_TIMEOUT,
    )

    if not OPENWEATHER_API_KEY:
        logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will be rejected")
    return WeatherClient(OPENWEATHER_API_KEY, OPENWEATHER_BASE_URL, WEATHER_REQUEST_TIMEOUT)


def reading_from_payload(payload: dict) -> WeatherReading:
    """Build the snapshot and rain flag from an OpenWeatherMap response body."""
    condition = payload["weather"][0]
    temp = payload["main"]["temp"]
    snapshot = f"{condition['description']}, {temp}°C"
    recent_rain = "rain" in str(condition.get("main", "")).lower()
    return WeatherReading(snapshot=snapshot, recent_rain=recent_rain)


def fetch_weather(coords: Coordinates | None, client: WeatherClient) -> WeatherReading:
    if coords is None:
        return WeatherReading(LOCATION_UNRESOLVED)

    try:
        payload = client.current(coords.lat, coords.lon)
        return reading_from_payload(payload)
    except WeatherProviderError as e:
        logger.error("OpenWeatherMap API request failed: %s", e)
        return WeatherReading(f"API Error: {e.message or DEFAULT_PROVIDER_MESSAGE}")
    except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
        logger.error("Error fetching weather data: %s", e)
        return WeatherReading(FETCH_ERROR)


def score_weather(reading: WeatherReading) -> Signal | None:
    if reading.recent_rain:
        return Signal(RAIN_POINTS, "Recent rain increases contamination risk.")
    return None
