from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from health_analyzer.errors import DataSourceError
from health_analyzer.store import SupabaseStore

END = datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)
START = END - timedelta(days=7)


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def supabase_store(client):
    return SupabaseStore(client)


def history_query(client):
    return client.table.return_value.select.return_value.eq.return_value.lt.return_value.gte.return_value


class TestSupabaseStore:
    def test_history_query_structure(self, client, supabase_store):
        history_query(client).execute.return_value.data = [{"diarrhea_cases": 3}, {"diarrhea_cases": None}]

        counts = supabase_store.fetch_diarrhea_counts("Rampur", START, END)

        assert counts == [3, 0]
        client.table.assert_called_once_with("reports")
        client.table.return_value.select.assert_called_once_with("diarrhea_cases")
        select = client.table.return_value.select.return_value
        select.eq.assert_called_once_with("village_name", "Rampur")
        select.eq.return_value.lt.assert_called_once_with("created_at", END.isoformat())
        select.eq.return_value.lt.return_value.gte.assert_called_once_with("created_at", START.isoformat())

    def test_query_failure_raises_data_source_error(self, client, supabase_store):
        history_query(client).execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DataSourceError) as exc:
            supabase_store.fetch_diarrhea_counts("Rampur", START, END)
        assert isinstance(exc.value.__cause__, RuntimeError)

    def test_report_view_unwraps_list(self, client, supabase_store):
        client.rpc.return_value.execute.return_value.data = [{"id": 7, "lat": 1.5, "lon": 2.5}]

        view = supabase_store.fetch_report_view(7)

        client.rpc.assert_called_once_with("get_report_with_geojson", {"report_id": 7})
        assert view == {"id": 7, "lat": 1.5, "lon": 2.5}

    def test_report_view_empty(self, client, supabase_store):
        client.rpc.return_value.execute.return_value.data = []
        assert supabase_store.fetch_report_view(7) is None

    def test_update_report(self, client, supabase_store):
        fields = {"risk_level": "High", "weather_snapshot": "No data", "analysis_notes": ""}

        supabase_store.update_report(7, fields)

        client.table.assert_called_once_with("reports")
        client.table.return_value.update.assert_called_once_with(fields)
        client.table.return_value.update.return_value.eq.assert_called_once_with("id", 7)

    def test_allowlist_lookup(self, client, supabase_store):
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = [{"phone_number": "+91999"}]

        assert supabase_store.is_pre_approved("+91999") is True
        client.table.assert_called_once_with("pre_approved_officials")
        client.table.return_value.select.return_value.eq.assert_called_once_with("phone_number", "+91999")
        client.table.return_value.select.return_value.eq.return_value.limit.assert_called_once_with(1)

        query.execute.return_value.data = []
        assert supabase_store.is_pre_approved("+91999") is False

    def test_update_role(self, client, supabase_store):
        supabase_store.update_role("u1", "OFFICIAL")

        client.table.assert_called_once_with("profiles")
        client.table.return_value.update.assert_called_once_with({"role": "OFFICIAL"})
        client.table.return_value.update.return_value.eq.assert_called_once_with("id", "u1")
