"""Pytest fixtures and fakes for the health analyzer tests."""

from datetime import datetime, timezone

import pytest

from health_analyzer.errors import DataSourceError

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

RAIN_PAYLOAD = {
    "weather": [{"main": "Rain", "description": "light rain"}],
    "main": {"temp": 24.5},
}
CLOUDS_PAYLOAD = {
    "weather": [{"main": "Clouds", "description": "overcast clouds"}],
    "main": {"temp": 31},
}


class FakeStore:
    """In-memory DataStore. Set an ``*_error`` attribute to make that operation fail."""

    def __init__(self, history=None, report_view=None, allowlist=()):
        self.history = list(history or [])
        self.report_view = report_view
        self.allowlist = set(allowlist)
        self.history_error = False
        self.view_error = False
        self.update_error = False
        self.allowlist_error = False
        self.role_error = False
        self.history_calls = []
        self.view_calls = []
        self.report_updates = []
        self.role_updates = []

    def fetch_report_view(self, report_id):
        self.view_calls.append(report_id)
        if self.view_error:
            raise DataSourceError("rpc:get_report_with_geojson failed: boom")
        return self.report_view

    def fetch_diarrhea_counts(self, village_name, start, end):
        self.history_calls.append((village_name, start, end))
        if self.history_error:
            raise DataSourceError("select:reports_history failed: boom")
        return list(self.history)

    def update_report(self, report_id, fields):
        if self.update_error:
            raise DataSourceError("update:reports failed: boom")
        self.report_updates.append((report_id, fields))

    def is_pre_approved(self, phone):
        if self.allowlist_error:
            raise DataSourceError("select:pre_approved_officials failed: boom")
        return phone in self.allowlist

    def update_role(self, user_id, role):
        if self.role_error:
            raise DataSourceError("update:profiles failed: boom")
        self.role_updates.append((user_id, role))


class FakeWeatherClient:
    """Returns ``payload`` or raises ``error`` from ``current``."""

    def __init__(self, payload=None, error=None):
        self.payload = payload if payload is not None else CLOUDS_PAYLOAD
        self.error = error
        self.calls = []

    def current(self, lat, lon):
        self.calls.append((lat, lon))
        if self.error is not None:
            raise self.error
        return self.payload


class FakeSmsClient:
    def __init__(self, error=None, configured=True):
        self.error = error
        self.configured = configured
        self.sent = []

    def send(self, to, body):
        if self.error is not None:
            raise self.error
        self.sent.append((to, body))
        return {"sid": "SM123"}


def make_record(**overrides) -> dict:
    record = {
        "id": 101,
        "village_name": "Rampur",
        "diarrhea_cases": 0,
        "fever_cases": 0,
        "vomiting_cases": 0,
        "cases_in_children": 0,
        "water_source_tested": "Tube Well",
        "lat": 12.9,
        "lon": 77.6,
        "created_at": "2026-10-19T10:00:00+00:00",
    }
    record.update(overrides)
    return record


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def weather_client():
    return FakeWeatherClient()


@pytest.fixture
def sms_client():
    return FakeSmsClient()
