from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from campus_chat.domain.entities.thread import Thread, ordered_pair
from campus_chat.infrastructure.db.mappers import thread as mapper
from campus_chat.infrastructure.db.models.thread import ThreadModel


class ThreadReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, thread_id: UUID) -> Thread | None:
        result = await self._session.get(ThreadModel, thread_id, populate_existing=True)
        return mapper.model_to_entity(result) if result else None

    async def get_by_pair(self, user_a: int, user_b: int) -> Thread | None:
        low, high = ordered_pair(user_a, user_b)
        stmt = select(ThreadModel).where(
            ThreadModel.user_low == low,
            ThreadModel.user_high == high,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: int) -> list[Thread]:
        stmt = (
            select(ThreadModel)
            .where(or_(ThreadModel.user_low == user_id, ThreadModel.user_high == user_id))
            .order_by(ThreadModel.updated_at.desc(), ThreadModel.id)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ThreadWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_if_not_exists(self, thread: Thread) -> tuple[Thread, bool]:
        """Insert thread idempotently on the user pair. Returns (thread, created_flag)."""
        stmt = (
            pg_insert(ThreadModel)
            .values(
                id=thread.id,
                user_low=thread.user_low,
                user_high=thread.user_high,
                created_at=thread.created_at,
                updated_at=thread.updated_at,
            )
            .on_conflict_do_nothing(constraint="uq_chat_thread_pair")
            .returning(ThreadModel)
        )
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()

        if row is not None:
            return mapper.model_to_entity(row), True

        # Lost the race to a concurrent creator; fetch the winner
        stmt = select(ThreadModel).where(
            ThreadModel.user_low == thread.user_low,
            ThreadModel.user_high == thread.user_high,
        )
        existing = (await self._session.execute(stmt)).scalar_one()
        return mapper.model_to_entity(existing), False

    async def touch_updated_at(self, thread_id: UUID, ts: datetime) -> None:
        stmt = (
            update(ThreadModel)
            .where(ThreadModel.id == thread_id)
            .values(updated_at=ts)
        )
        await self._session.execute(stmt)
