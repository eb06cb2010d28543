from __future__ import annotations

from typing import Iterable, Protocol

from campus_chat.domain.entities.user import User


class UserReader(Protocol):
    """Read-only view of the identity store."""

    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_many(self, user_ids: Iterable[int]) -> dict[int, User]: ...

    async def list_ids(self) -> list[int]: ...
