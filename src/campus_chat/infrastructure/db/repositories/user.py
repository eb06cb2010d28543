from __future__ import annotations

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_chat.domain.entities.user import User
from campus_chat.infrastructure.db.mappers import user as mapper
from campus_chat.infrastructure.db.models.user import UserModel


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return mapper.model_to_entity(result) if result else None

    async def get_many(self, user_ids: Iterable[int]) -> dict[int, User]:
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self._session.execute(
            select(UserModel).where(UserModel.id.in_(ids))
        )
        return {m.id: mapper.model_to_entity(m) for m in result.scalars().all()}

    async def list_ids(self) -> list[int]:
        result = await self._session.execute(select(UserModel.id).order_by(UserModel.id))
        return list(result.scalars().all())
