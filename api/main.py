"""FastAPI service: receives Supabase database webhooks for reports and profiles."""

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from health_analyzer import __version__
from health_analyzer.alerts.push import TwilioClient, get_sms_client
from health_analyzer.scoring.weather import WeatherClient, get_weather_client
from health_analyzer.store import SupabaseStore, get_store
from health_analyzer.webhook import dispatch_event

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def store_dependency() -> SupabaseStore | None:
    """Process-wide store, or None when Supabase is not configured."""
    try:
        return get_store()
    except ValueError as e:
        logger.error("Supabase client unavailable: %s", e)
        return None


@lru_cache(maxsize=1)
def weather_dependency() -> WeatherClient:
    return get_weather_client()


@lru_cache(maxsize=1)
def sms_dependency() -> TwilioClient:
    return get_sms_client()


def alert_recipient_dependency() -> str:
    from health_analyzer.config import HEALTH_OFFICIAL_PHONE_NUMBER

    return HEALTH_OFFICIAL_PHONE_NUMBER


app = FastAPI(title="Health Analyzer Webhook", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    """Health check."""
    from health_analyzer.config import (
        OPENWEATHER_API_KEY,
        SUPABASE_SERVICE_KEY,
        SUPABASE_URL,
        TWILIO_ACCOUNT_SID,
        TWILIO_AUTH_TOKEN,
    )

    return {
        "status": "ok",
        "supabase_configured": bool(SUPABASE_URL and SUPABASE_SERVICE_KEY),
        "weather_configured": bool(OPENWEATHER_API_KEY),
        "sms_configured": bool(TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN),
    }


@app.options("/")
def preflight():
    """CORS preflight for browser callers."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@app.post("/")
async def webhook(
    request: Request,
    store: SupabaseStore | None = Depends(store_dependency),
    weather_client: WeatherClient = Depends(weather_dependency),
    sms_client: TwilioClient = Depends(sms_dependency),
    alert_recipient: str = Depends(alert_recipient_dependency),
):
    """
    Accept a database webhook and route it.

    Body: { "type": "INSERT", "table": "profiles" | "reports", "record": {...} }
    """
    try:
        payload = await request.json()
        logger.info("Webhook received payload: %s", payload)
        message = await run_in_threadpool(
            dispatch_event, payload, store, weather_client, sms_client, alert_recipient
        )
    except Exception as e:
        logger.exception("Critical error in webhook handler: %s", e)
        return JSONResponse({"error": str(e)}, status_code=400, headers=CORS_HEADERS)

    return JSONResponse({"message": message}, status_code=200, headers=CORS_HEADERS)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=True)
