from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol
from uuid import UUID

from campus_chat.domain.entities.chat_message import ChatMessage


class ChatMessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> ChatMessage | None: ...

    async def list_for_thread(self, thread_id: UUID) -> list[ChatMessage]:
        """Full history in append order."""
        ...

    async def list_for_threads(
        self, thread_ids: Iterable[UUID]
    ) -> dict[UUID, list[ChatMessage]]: ...


class ChatMessageWriter(Protocol):
    async def add(self, message: ChatMessage) -> ChatMessage: ...

    async def update_content(
        self, message_id: UUID, content: str, edited_at: datetime
    ) -> None: ...

    async def delete(self, message_id: UUID) -> None: ...

    async def delete_older_than(self, ts: datetime) -> int: ...
