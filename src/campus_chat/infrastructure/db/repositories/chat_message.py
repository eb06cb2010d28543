from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus_chat.domain.entities.chat_message import ChatMessage
from campus_chat.infrastructure.db.mappers import chat_message as mapper
from campus_chat.infrastructure.db.models.chat_message import ChatMessageModel


class ChatMessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: UUID) -> ChatMessage | None:
        result = await self._session.get(ChatMessageModel, message_id, populate_existing=True)
        return mapper.model_to_entity(result) if result else None

    async def list_for_thread(self, thread_id: UUID) -> list[ChatMessage]:
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.thread_id == thread_id)
            .order_by(ChatMessageModel.seq.asc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_for_threads(
        self,
        thread_ids: Iterable[UUID],
    ) -> dict[UUID, list[ChatMessage]]:
        ids = list(thread_ids)
        if not ids:
            return {}
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.thread_id.in_(ids))
            .order_by(ChatMessageModel.thread_id, ChatMessageModel.seq.asc())
        )
        result = await self._session.execute(stmt)
        grouped: dict[UUID, list[ChatMessage]] = defaultdict(list)
        for m in result.scalars().all():
            grouped[m.thread_id].append(mapper.model_to_entity(m))
        return dict(grouped)


class ChatMessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: ChatMessage) -> ChatMessage:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update_content(
        self,
        message_id: UUID,
        content: str,
        edited_at: datetime,
    ) -> None:
        stmt = (
            update(ChatMessageModel)
            .where(ChatMessageModel.id == message_id)
            .values(content=content, edited_at=edited_at)
        )
        await self._session.execute(stmt)

    async def delete(self, message_id: UUID) -> None:
        await self._session.execute(
            delete(ChatMessageModel).where(ChatMessageModel.id == message_id)
        )

    async def delete_older_than(self, ts: datetime) -> int:
        result = await self._session.execute(
            delete(ChatMessageModel).where(ChatMessageModel.created_at < ts)
        )
        return result.rowcount or 0
