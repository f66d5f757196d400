"""Rate-limit snapshot parsed from response headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import httpx

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"
USED_HEADER = "x-ratelimit-used"
RESET_HEADER = "x-ratelimit-reset"


def _header_int(headers: Mapping[str, str], name: str) -> int:
    value = (headers.get(name) or "").strip()
    # Plain ASCII digits only; int() alone would take "+5" and "1_000".
    if not (value.isascii() and value.isdecimal()):
        return 0
    return int(value)


@dataclass(frozen=True)
class RateLimit:
    """Quota state reported by the server at response time.

    Missing or non-numeric headers leave the matching field at ``0``.
    ``used`` is taken from ``X-RateLimit-Used`` only and is never derived.
    """

    limit: int = 0
    remaining: int = 0
    used: int = 0
    reset: int = 0

    @classmethod
    def from_headers(cls, headers: Mapping[str, str] | None) -> RateLimit:
        """Parse ``X-RateLimit-*`` headers. Never raises."""
        if headers is None:
            return cls()
        headers = httpx.Headers(headers)
        return cls(
            limit=_header_int(headers, LIMIT_HEADER),
            remaining=_header_int(headers, REMAINING_HEADER),
            used=_header_int(headers, USED_HEADER),
            reset=_header_int(headers, RESET_HEADER),
        )
