"""Tests for ClientMetrics."""

from __future__ import annotations

from ghrest.metrics import ClientMetrics


def test_record_send():
    m = ClientMetrics()
    m.record_send(200, 12.0)
    m.record_send(200, 8.0)
    m.record_send(429, 3.0)
    assert m.total_sends == 3
    assert m.status_codes == {200: 2, 429: 1}


def test_inc_retry():
    m = ClientMetrics()
    m.inc_retry(rate_limited=True)
    m.inc_retry(rate_limited=False)
    assert m.retries == 2
    assert m.rate_limited == 1


def test_inc_exhausted():
    m = ClientMetrics()
    m.inc_exhausted()
    assert m.exhausted == 1


def test_latency_percentiles_empty():
    p = ClientMetrics().get_latency_percentiles()
    assert p == {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}


def test_latency_percentiles_populated():
    m = ClientMetrics()
    for i in range(1, 101):
        m.record_send(200, float(i))
    p = m.get_latency_percentiles()
    assert 50.0 <= p["p50"] <= 51.0
    assert p["p90"] >= 90.0
    assert p["p99"] >= 99.0


def test_snapshot_structure():
    m = ClientMetrics()
    m.record_send(503, 10.5)
    m.inc_retry(rate_limited=False)
    s = m.snapshot()
    assert "uptime_seconds" in s
    assert s["total_sends"] == 1
    assert s["retries"] == 1
    assert s["status_codes"] == {503: 1}
    assert "p50" in s["latency_ms"]


def test_snapshot_is_a_copy():
    m = ClientMetrics()
    m.record_send(200, 1.0)
    s = m.snapshot()
    m.record_send(200, 1.0)
    assert s["status_codes"] == {200: 1}


def test_reset():
    m = ClientMetrics()
    m.record_send(200, 5.0)
    m.inc_retry(rate_limited=True)
    m.inc_exhausted()
    m.reset()
    s = m.snapshot()
    assert s["total_sends"] == 0
    assert s["retries"] == s["rate_limited"] == s["exhausted"] == 0
    assert s["status_codes"] == {}


def test_latency_bounding():
    m = ClientMetrics()
    # One past the cap triggers halving.
    for i in range(10_001):
        m.record_send(200, float(i))
    assert len(m._latencies) == 5_000
