from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol
from uuid import UUID

from campus_chat.domain.entities.group_chat import GroupChat
from campus_chat.domain.entities.group_message import GroupMessage


class GroupReader(Protocol):
    async def get_by_id(self, group_id: UUID) -> GroupChat | None: ...

    async def get_world(self) -> GroupChat | None: ...

    async def list_for_user(self, user_id: int) -> list[GroupChat]:
        """Groups where the user is a member or creator, plus the world group. Newest first."""
        ...


class GroupWriter(Protocol):
    async def create(self, group: GroupChat) -> GroupChat: ...


class GroupMemberReader(Protocol):
    async def is_member(self, group_id: UUID, user_id: int) -> bool: ...

    async def list_member_ids(self, group_id: UUID) -> list[int]: ...


class GroupMemberWriter(Protocol):
    async def add_many(
        self, group_id: UUID, user_ids: Iterable[int], added_at: datetime
    ) -> None: ...

    async def remove(self, group_id: UUID, user_id: int) -> bool:
        """Return True if a membership row was removed."""
        ...


class GroupMessageReader(Protocol):
    async def list_recent(self, group_id: UUID, *, limit: int) -> list[GroupMessage]:
        """The most recent ``limit`` messages, returned oldest first."""
        ...


class GroupMessageWriter(Protocol):
    async def add(self, message: GroupMessage) -> GroupMessage: ...
