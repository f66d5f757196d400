"""Thread-safe in-memory client metrics."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class ClientMetrics:
    """Counts sends, retries and status codes seen by one client.

    Thread-safe via a single ``threading.Lock``.  The latency list is
    bounded at ``_MAX_LATENCY_SAMPLES``; when exceeded it is halved by
    keeping only the most-recent entries.
    """

    _MAX_LATENCY_SAMPLES: int = field(default=10_000, repr=False)

    total_sends: int = field(default=0, init=False)
    retries: int = field(default=0, init=False)
    rate_limited: int = field(default=0, init=False)
    exhausted: int = field(default=0, init=False)
    status_codes: dict[int, int] = field(default_factory=dict, init=False)

    # Latency samples (milliseconds)
    _latencies: list[float] = field(default_factory=list, init=False, repr=False)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _start_time: float = field(default_factory=time.monotonic, init=False, repr=False)

    # -- Counter helpers ---------------------------------------------------

    def record_send(self, status_code: int, ms: float) -> None:
        with self._lock:
            self.total_sends += 1
            self.status_codes[status_code] = self.status_codes.get(status_code, 0) + 1
            self._latencies.append(ms)
            if len(self._latencies) > self._MAX_LATENCY_SAMPLES:
                half = self._MAX_LATENCY_SAMPLES // 2
                self._latencies = self._latencies[-half:]

    def inc_retry(self, rate_limited: bool) -> None:
        with self._lock:
            self.retries += 1
            if rate_limited:
                self.rate_limited += 1

    def inc_exhausted(self) -> None:
        with self._lock:
            self.exhausted += 1

    # -- Latency -----------------------------------------------------------

    def get_latency_percentiles(self) -> dict[str, float]:
        with self._lock:
            return self._percentiles_unlocked()

    def _percentiles_unlocked(self) -> dict[str, float]:
        """Compute p50/p90/p95/p99. Caller must hold ``_lock``."""
        if not self._latencies:
            return {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
        s = sorted(self._latencies)
        n = len(s)
        return {
            "p50": round(s[int(n * 0.50)], 2),
            "p90": round(s[int(min(n * 0.90, n - 1))], 2),
            "p95": round(s[int(min(n * 0.95, n - 1))], 2),
            "p99": round(s[int(min(n * 0.99, n - 1))], 2),
        }

    # -- Snapshot / reset --------------------------------------------------

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "uptime_seconds": round(time.monotonic() - self._start_time, 2),
                "total_sends": self.total_sends,
                "retries": self.retries,
                "rate_limited": self.rate_limited,
                "exhausted": self.exhausted,
                "status_codes": dict(self.status_codes),
                "latency_ms": self._percentiles_unlocked(),
            }

    def reset(self) -> None:
        with self._lock:
            self.total_sends = 0
            self.retries = 0
            self.rate_limited = 0
            self.exhausted = 0
            self.status_codes.clear()
            self._latencies.clear()
            self._start_time = time.monotonic()
