"""Structured JSON logging for external calls."""

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class ExternalCallLog:
    """Structured log for one outbound request (Supabase, weather, SMS)."""

    service: str
    operation: str
    timestamp: str
    latency_ms: int | None = None
    ok: bool = True
    error: str | None = None

    def to_json(self) -> str:
        return json.dumps(
            {
                "service": self.service,
                "operation": self.operation,
                "timestamp": self.timestamp,
                "latency_ms": self.latency_ms,
                "ok": self.ok,
                "error": self.error,
            },
            default=str,
        )


def log_external_call(
    service: str,
    operation: str,
    latency_ms: int | None = None,
    ok: bool = True,
    error: str | None = None,
) -> None:
    """Log an external call to stdout as structured JSON."""
    log = ExternalCallLog(
        service=service,
        operation=operation,
        timestamp=datetime.now(timezone.utc).isoformat(),
        latency_ms=latency_ms,
        ok=ok,
        error=error,
    )
    print(log.to_json(), flush=True)


class Timer:
    """Context manager for measuring latency."""

    def __init__(self):
        self.start: float = 0.0
        self.elapsed_ms: int = 0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.elapsed_ms = int((time.perf_counter() - self.start) * 1000)
