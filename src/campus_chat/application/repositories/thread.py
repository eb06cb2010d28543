from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from campus_chat.domain.entities.thread import Thread


class ThreadReader(Protocol):
    async def get_by_id(self, thread_id: UUID) -> Thread | None: ...

    async def get_by_pair(self, user_a: int, user_b: int) -> Thread | None:
        """Find the thread for an unordered pair of users."""
        ...

    async def list_for_user(self, user_id: int) -> list[Thread]:
        """Threads the user participates in, most recently updated first."""
        ...


class ThreadWriter(Protocol):
    async def create_if_not_exists(self, thread: Thread) -> tuple[Thread, bool]:
        """Insert thread. Return (thread, created). On pair conflict return the existing one."""
        ...

    async def touch_updated_at(self, thread_id: UUID, ts: datetime) -> None: ...
