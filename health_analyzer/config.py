"""Configuration for the health analyzer webhook."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root if present
_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


def _int_env(key: str, default: int) -> int:
    val = os.environ.get(key)
    if val is None or val == "":
        return default
    try:
        return max(1, int(val))
    except ValueError:
        return default


# Supabase - service role key bypasses RLS for the webhook writes
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_KEY = os.environ.get("SUPABASE_SERVICE_KEY") or os.environ.get("SERVICE_ROLE_KEY", "")
SUPABASE_REQUEST_TIMEOUT = _int_env("SUPABASE_REQUEST_TIMEOUT", 10)

# OpenWeatherMap current conditions
OPENWEATHER_API_KEY = os.environ.get("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.environ.get(
    "OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5/weather"
)
WEATHER_REQUEST_TIMEOUT = _int_env("WEATHER_REQUEST_TIMEOUT", 10)

# Twilio SMS alerts
TWILIO_ACCOUNT_SID = os.environ.get("TWILIO_ACCOUNT_SID", "")
TWILIO_AUTH_TOKEN = os.environ.get("TWILIO_AUTH_TOKEN", "")
TWILIO_PHONE_NUMBER = os.environ.get("TWILIO_PHONE_NUMBER", "")
TWILIO_BASE_URL = os.environ.get("TWILIO_BASE_URL", "https://api.twilio.com/2010-04-01")
HEALTH_OFFICIAL_PHONE_NUMBER = os.environ.get("HEALTH_OFFICIAL_PHONE_NUMBER", "")
SMS_REQUEST_TIMEOUT = _int_env("SMS_REQUEST_TIMEOUT", 10)

# Trailing window for case velocity
HISTORY_WINDOW_DAYS = _int_env("HISTORY_WINDOW_DAYS", 7)
