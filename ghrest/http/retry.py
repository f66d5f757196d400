"""Retry eligibility and backoff computation for the request executor."""

from __future__ import annotations

import time

from ghrest.http.ratelimit import RateLimit

DEFAULT_WAIT_MIN = 5.0
DEFAULT_WAIT_MAX = 60.0

# Wait used when the advertised reset time has already passed.
RESET_FALLBACK_WAIT = 1.0

RATE_LIMIT_STATUSES = frozenset({403, 429})
TRANSIENT_STATUSES = frozenset({500, 502, 503})


def is_rate_limited(status_code: int, rate_limit: RateLimit) -> bool:
    """True when *status_code* signals an exhausted quota."""
    return status_code in RATE_LIMIT_STATUSES and rate_limit.remaining == 0


def should_retry(status_code: int, rate_limit: RateLimit) -> bool:
    """Decide whether a received response qualifies for another attempt.

    403/429 only count as retryable when the quota is exhausted; with
    quota left they are ordinary client errors (e.g. permission denied).
    """
    if is_rate_limited(status_code, rate_limit):
        return True
    return status_code in TRANSIENT_STATUSES


def compute_backoff(
    wait_min: float,
    wait_max: float,
    attempt: int,
    rate_limit: RateLimit,
    now: float | None = None,
) -> float:
    """Return the number of seconds to wait before the next attempt.

    A non-zero ``rate_limit.reset`` wins over the exponential schedule.
    Otherwise ``wait_min * 2 ** attempt`` capped at ``wait_max``, with
    zero bounds replaced by the module defaults. Pure: never sleeps.
    """
    if rate_limit.reset:
        if now is None:
            now = time.time()
        wait = rate_limit.reset - now
        if wait <= 0:
            return RESET_FALLBACK_WAIT
        return wait

    if wait_min <= 0:
        wait_min = DEFAULT_WAIT_MIN
    if wait_max <= 0:
        wait_max = DEFAULT_WAIT_MAX

    # Cap the exponent so huge attempt counts cannot overflow the float.
    return min(wait_min * 2 ** min(attempt, 62), wait_max)
