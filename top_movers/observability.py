"""In-memory observability helpers for provider outcomes and request latency."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from time import perf_counter
from typing import Optional


@dataclass
class RequestMetricsSnapshot:
    """Snapshot of aggregate request timing metrics."""

    request_count: int
    average_ms: float
    max_ms: float
    last_ms: float


@dataclass
class ProviderStatus:
    last_success: Optional[datetime] = None
    last_failure: Optional[datetime] = None
    last_error: Optional[str] = None


class RuntimeObservability:
    """Tracks process uptime, per-provider outcomes, and request latency metrics."""

    def __init__(self):
        self.process_started_at = datetime.now(timezone.utc)
        self._providers: dict[str, ProviderStatus] = {}
        self._request_count = 0
        self._request_total_ms = 0.0
        self._request_max_ms = 0.0
        self._request_last_ms = 0.0
        self._lock = Lock()

    def _get(self, provider: str) -> ProviderStatus:
        if provider not in self._providers:
            self._providers[provider] = ProviderStatus()
        return self._providers[provider]

    def mark_provider_success(self, provider: str):
        with self._lock:
            self._get(provider).last_success = datetime.now(timezone.utc)

    def mark_provider_failure(self, provider: str, message: str):
        with self._lock:
            status = self._get(provider)
            status.last_failure = datetime.now(timezone.utc)
            status.last_error = message

    def provider_snapshot(self) -> dict[str, ProviderStatus]:
        with self._lock:
            return {
                name: ProviderStatus(status.last_success, status.last_failure, status.last_error)
                for name, status in self._providers.items()
            }

    def mark_request_timing(self, elapsed_ms: float):
        """Record request timing in milliseconds."""
        with self._lock:
            self._request_count += 1
            self._request_total_ms += elapsed_ms
            self._request_last_ms = elapsed_ms
            if elapsed_ms > self._request_max_ms:
                self._request_max_ms = elapsed_ms

    def request_metrics(self) -> RequestMetricsSnapshot:
        """Build a metrics snapshot safe for serialization."""
        with self._lock:
            if self._request_count == 0:
                average = 0.0
            else:
                average = self._request_total_ms / self._request_count

            return RequestMetricsSnapshot(
                request_count=self._request_count,
                average_ms=round(average, 3),
                max_ms=round(self._request_max_ms, 3),
                last_ms=round(self._request_last_ms, 3),
            )

    def uptime_seconds(self) -> float:
        """Return process uptime in seconds."""
        return (datetime.now(timezone.utc) - self.process_started_at).total_seconds()


class RequestTimer:
    """Small helper for request timing."""

    def __init__(self):
        self._started = perf_counter()

    def elapsed_ms(self) -> float:
        return (perf_counter() - self._started) * 1000


observability = RuntimeObservability()
