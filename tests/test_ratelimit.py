"""Tests for rate-limit header extraction."""

from __future__ import annotations

import httpx
import pytest

from ghrest.http.ratelimit import RateLimit

_FULL_HEADERS = {
    "x-ratelimit-limit": "5000",
    "x-ratelimit-remaining": "4987",
    "x-ratelimit-used": "13",
    "x-ratelimit-reset": "1700000000",
}


class TestFromHeaders:
    def test_all_present(self):
        rl = RateLimit.from_headers(_FULL_HEADERS)
        assert rl == RateLimit(limit=5000, remaining=4987, used=13, reset=1700000000)

    def test_empty_headers_are_zero(self):
        assert RateLimit.from_headers({}) == RateLimit(0, 0, 0, 0)

    def test_none_is_zero(self):
        assert RateLimit.from_headers(None) == RateLimit()

    def test_partial_headers(self):
        rl = RateLimit.from_headers({"x-ratelimit-remaining": "0"})
        assert rl.remaining == 0
        assert rl.limit == 0
        assert rl.reset == 0

    def test_malformed_field_defaults_to_zero(self):
        rl = RateLimit.from_headers({"x-ratelimit-limit": "abc"})
        assert rl == RateLimit(limit=0, remaining=0, used=0, reset=0)

    def test_malformed_field_does_not_affect_others(self):
        headers = dict(_FULL_HEADERS, **{"x-ratelimit-used": "1.5"})
        rl = RateLimit.from_headers(headers)
        assert rl.used == 0
        assert rl.limit == 5000
        assert rl.reset == 1700000000

    def test_used_is_not_derived(self):
        rl = RateLimit.from_headers(
            {"x-ratelimit-limit": "60", "x-ratelimit-remaining": "10"}
        )
        assert rl.used == 0

    def test_header_names_case_insensitive(self):
        rl = RateLimit.from_headers({"X-RateLimit-Limit": "60"})
        assert rl.limit == 60

    def test_accepts_httpx_headers(self):
        resp = httpx.Response(200, headers=_FULL_HEADERS)
        assert RateLimit.from_headers(resp.headers).remaining == 4987

    @pytest.mark.parametrize(
        "value", ["", " ", "12abc", "-", "0x10", "1_000", "+5", "-5"],
    )
    def test_garbage_values(self, value):
        assert RateLimit.from_headers({"x-ratelimit-reset": value}).reset == 0


def test_frozen():
    rl = RateLimit(limit=60, remaining=59, used=1, reset=42)
    with pytest.raises(AttributeError):
        rl.limit = 0  # type: ignore[misc]


def test_surrounding_whitespace_tolerated():
    assert RateLimit.from_headers({"x-ratelimit-remaining": " 42 "}).remaining == 42
