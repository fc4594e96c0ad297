"""Supabase-backed data store for reports, profiles and the officials allowlist.

Every query goes through ``_execute`` so that failures surface as
``DataSourceError`` and each call is logged with its latency. Callers decide
how to degrade.
"""

from datetime import datetime
from functools import lru_cache
from typing import Any, Protocol

from health_analyzer.errors import DataSourceError
from health_analyzer.utils.logging import Timer, log_external_call

REPORTS_TABLE = "reports"
PROFILES_TABLE = "profiles"
ALLOWLIST_TABLE = "pre_approved_officials"
REPORT_VIEW_RPC = "get_report_with_geojson"


class DataStore(Protocol):
    """Operations the pipeline needs from the backing store."""

    def fetch_report_view(self, report_id: Any) -> dict | None: ...

    def fetch_diarrhea_counts(
        self, village_name: str, start: datetime, end: datetime
    ) -> list[int]: ...

    def update_report(self, report_id: Any, fields: dict) -> None: ...

    def is_pre_approved(self, phone: str) -> bool: ...

    def update_role(self, user_id: Any, role: str) -> None: ...


class SupabaseStore:
    """DataStore over a supabase-py client."""

    def __init__(self, client):
        self.client = client

    def _execute(self, operation: str, query):
        failure = None
        with Timer() as timer:
            try:
                resp = query.execute()
            except Exception as e:
                failure = e
        if failure is not None:
            log_external_call(
                "supabase", operation, latency_ms=timer.elapsed_ms, ok=False, error=str(failure)
            )
            raise DataSourceError(f"{operation} failed: {failure}") from failure
        log_external_call("supabase", operation, latency_ms=timer.elapsed_ms)
        return resp

    def fetch_report_view(self, report_id: Any) -> dict | None:
        """Re-fetch a report through the RPC that exposes lat/lon as plain columns."""
        resp = self._execute(
            "rpc:" + REPORT_VIEW_RPC,
            self.client.rpc(REPORT_VIEW_RPC, {"report_id": report_id}),
        )
        data = resp.data
        if isinstance(data, list):
            data = data[0] if data else None
        return data or None

    def fetch_diarrhea_counts(self, village_name: str, start: datetime, end: datetime) -> list[int]:
        """Diarrhea case counts for a village with ``start <= created_at < end``."""
        resp = self._execute(
            "select:reports_history",
            self.client.table(REPORTS_TABLE)
            .select("diarrhea_cases")
            .eq("village_name", village_name)
            .lt("created_at", end.isoformat())
            .gte("created_at", start.isoformat()),
        )
        return [row.get("diarrhea_cases") or 0 for row in resp.data or []]

    def update_report(self, report_id: Any, fields: dict) -> None:
        self._execute(
            "update:reports",
            self.client.table(REPORTS_TABLE).update(fields).eq("id", report_id),
        )

    def is_pre_approved(self, phone: str) -> bool:
        resp = self._execute(
            "select:" + ALLOWLIST_TABLE,
            self.client.table(ALLOWLIST_TABLE)
            .select("phone_number")
            .eq("phone_number", phone)
            .limit(1),
        )
        return bool(resp.data)

    def update_role(self, user_id: Any, role: str) -> None:
        self._execute(
            "update:profiles",
            self.client.table(PROFILES_TABLE).update({"role": role}).eq("id", user_id),
        )


@lru_cache(maxsize=1)
def get_supabase_client():
    """Create the process-wide Supabase client. Raises if not configured."""
    from supabase import ClientOptions, create_client

    from health_analyzer.config import (
        SUPABASE_REQUEST_TIMEOUT,
        SUPABASE_SERVICE_KEY,
        SUPABASE_URL,
    )

    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
    return create_client(
        SUPABASE_URL,
        SUPABASE_SERVICE_KEY,
        options=ClientOptions(postgrest_client_timeout=SUPABASE_REQUEST_TIMEOUT),
    )


def get_store() -> SupabaseStore:
    return SupabaseStore(get_supabase_client())
