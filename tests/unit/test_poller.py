from __future__ import annotations

import asyncio

import pytest

from campus_chat.client.poller import PollLoop


@pytest.mark.asyncio
async def test_poll_loop_ticks_until_stopped():
    ticks = 0

    async def tick() -> None:
        nonlocal ticks
        ticks += 1

    loop = PollLoop(0.01, tick, immediate=True)
    loop.start()
    await asyncio.sleep(0.05)
    await loop.stop()
    seen = ticks

    await asyncio.sleep(0.03)
    assert seen >= 2
    assert ticks == seen
    assert not loop.running


@pytest.mark.asyncio
async def test_poll_loop_survives_failing_ticks():
    calls = 0

    async def tick() -> None:
        nonlocal calls
        calls += 1
        raise RuntimeError("server down")

    loop = PollLoop(0.01, tick, immediate=True)
    loop.start()
    await asyncio.sleep(0.05)
    assert loop.running
    await loop.stop()
    assert calls >= 2


@pytest.mark.asyncio
async def test_delayed_first_tick():
    calls = 0

    async def tick() -> None:
        nonlocal calls
        calls += 1

    loop = PollLoop(10, tick)
    loop.start()
    await asyncio.sleep(0.02)
    await loop.stop()
    assert calls == 0


@pytest.mark.asyncio
async def test_stop_cancels_inflight_tick():
    started = asyncio.Event()
    finished = False

    async def tick() -> None:
        nonlocal finished
        started.set()
        await asyncio.sleep(10)
        finished = True

    loop = PollLoop(0.01, tick, immediate=True)
    loop.start()
    await started.wait()
    await loop.stop()
    assert finished is False
