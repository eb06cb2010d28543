from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import pytest

from campus_chat.config import settings
from campus_chat.workers import retention_worker

NOW = datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)


def test_retention_cutoff():
    assert retention_worker.retention_cutoff(NOW, 10) == NOW - timedelta(hours=10)
    assert retention_worker.retention_cutoff(NOW, 0) is None
    assert retention_worker.retention_cutoff(NOW, -1) is None


@pytest.mark.asyncio
async def test_worker_exits_when_retention_disabled(monkeypatch):
    calls = 0

    async def sweep() -> int:
        nonlocal calls
        calls += 1
        return 0

    monkeypatch.setattr(settings, "CHAT_MESSAGE_RETENTION_HOURS", 0)
    monkeypatch.setattr(retention_worker, "_sweep", sweep)

    await retention_worker.run_retention_worker()

    assert calls == 0


@pytest.mark.asyncio
async def test_worker_keeps_running_after_failed_sweep(monkeypatch, caplog):
    calls = 0

    async def sweep() -> int:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("database went away")
        raise asyncio.CancelledError

    monkeypatch.setattr(settings, "CHAT_MESSAGE_RETENTION_HOURS", 10)
    monkeypatch.setattr(settings, "RETENTION_SWEEP_SECONDS", 0)
    monkeypatch.setattr(retention_worker, "_sweep", sweep)

    with caplog.at_level(logging.ERROR, logger=retention_worker.__name__):
        with pytest.raises(asyncio.CancelledError):
            await retention_worker.run_retention_worker()

    assert calls == 2
    assert "Retention worker loop error" in caplog.text
