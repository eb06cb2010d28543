from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

Tick = Callable[[], Awaitable[None]]


class PollLoop:
    """Run ``tick`` every ``interval`` seconds until stopped.

    A failing tick is logged and the loop carries on at the same interval;
    the next tick is the retry.
    """

    def __init__(
        self,
        interval: float,
        tick: Tick,
        *,
        name: str = "poll",
        immediate: bool = False,
    ) -> None:
        self._interval = interval
        self._tick = tick
        self._name = name
        self._immediate = immediate
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=self._name)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        if not self._immediate:
            await asyncio.sleep(self._interval)
        while True:
            try:
                await self._tick()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("%s tick failed", self._name)
            await asyncio.sleep(self._interval)
