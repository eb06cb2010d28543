from __future__ import annotations

from typing import Protocol
from uuid import UUID

from campus_chat.domain.entities.notification import Notification


class NotificationReader(Protocol):
    async def get_by_id(self, notification_id: UUID) -> Notification | None: ...

    async def list_for_user(
        self, user_id: int, *, limit: int | None = None
    ) -> list[Notification]:
        """Most recent first."""
        ...

    async def count_unread(self, user_id: int) -> int: ...


class NotificationWriter(Protocol):
    async def add(self, notification: Notification) -> Notification: ...

    async def add_many(self, notifications: list[Notification]) -> None: ...

    async def mark_read(self, notification_id: UUID) -> None: ...

    async def mark_all_read(self, user_id: int) -> int:
        """Flip every unread notification of the user. Return rows changed."""
        ...
