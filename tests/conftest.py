from __future__ import annotations

import os

import pytest

from ghrest.http import executor


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep ``GHREST_*`` variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("GHREST_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(os.path.dirname(__file__))


@pytest.fixture
def waits(monkeypatch) -> list[float]:
    """Replace the executor's backoff waits with a recorder."""
    recorded: list[float] = []

    def fake_wait(delay, cancel):
        recorded.append(delay)
        return False

    async def fake_async_wait(delay, cancel):
        recorded.append(delay)
        return False

    monkeypatch.setattr(executor, "_wait", fake_wait)
    monkeypatch.setattr(executor, "_async_wait", fake_async_wait)
    return recorded
