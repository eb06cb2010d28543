from __future__ import annotations

from datetime import datetime
from typing import Iterable
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from campus_chat.domain.entities.group_chat import GroupChat
from campus_chat.domain.entities.group_message import GroupMessage
from campus_chat.domain.value_objects.enums import GroupType
from campus_chat.infrastructure.db.mappers import group as mapper
from campus_chat.infrastructure.db.models.group_chat import GroupChatModel
from campus_chat.infrastructure.db.models.group_member import GroupMemberModel
from campus_chat.infrastructure.db.models.group_message import GroupMessageModel


class GroupReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, group_id: UUID) -> GroupChat | None:
        result = await self._session.get(GroupChatModel, group_id)
        return mapper.model_to_entity(result) if result else None

    async def get_world(self) -> GroupChat | None:
        stmt = select(GroupChatModel).where(GroupChatModel.type == GroupType.WORLD).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: int) -> list[GroupChat]:
        member_of = select(GroupMemberModel.group_id).where(GroupMemberModel.user_id == user_id)
        stmt = (
            select(GroupChatModel)
            .where(
                or_(
                    GroupChatModel.type == GroupType.WORLD,
                    GroupChatModel.created_by == user_id,
                    GroupChatModel.id.in_(member_of),
                )
            )
            .order_by(GroupChatModel.created_at.desc(), GroupChatModel.id)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class GroupWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, group: GroupChat) -> GroupChat:
        model = mapper.entity_to_model(group)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)


class GroupMemberReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def is_member(self, group_id: UUID, user_id: int) -> bool:
        stmt = (
            select(GroupMemberModel.id)
            .where(
                GroupMemberModel.group_id == group_id,
                GroupMemberModel.user_id == user_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_member_ids(self, group_id: UUID) -> list[int]:
        stmt = (
            select(GroupMemberModel.user_id)
            .where(GroupMemberModel.group_id == group_id)
            .order_by(GroupMemberModel.added_at, GroupMemberModel.user_id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())


class GroupMemberWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_many(
        self,
        group_id: UUID,
        user_ids: Iterable[int],
        added_at: datetime,
    ) -> None:
        rows = [
            {"group_id": group_id, "user_id": uid, "added_at": added_at}
            for uid in user_ids
        ]
        if not rows:
            return
        stmt = (
            pg_insert(GroupMemberModel)
            .values(rows)
            .on_conflict_do_nothing(constraint="uq_group_member")
        )
        await self._session.execute(stmt)

    async def remove(self, group_id: UUID, user_id: int) -> bool:
        result = await self._session.execute(
            delete(GroupMemberModel).where(
                GroupMemberModel.group_id == group_id,
                GroupMemberModel.user_id == user_id,
            )
        )
        return bool(result.rowcount)


class GroupMessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_recent(self, group_id: UUID, *, limit: int) -> list[GroupMessage]:
        stmt = (
            select(GroupMessageModel)
            .where(GroupMessageModel.group_id == group_id)
            .order_by(GroupMessageModel.seq.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        newest_first = [mapper.message_model_to_entity(m) for m in result.scalars().all()]
        return list(reversed(newest_first))


class GroupMessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: GroupMessage) -> GroupMessage:
        model = mapper.message_entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.message_model_to_entity(model)
