from __future__ import annotations

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from campus_chat.infrastructure.db.repositories.chat_message import (
    ChatMessageReaderRepo,
    ChatMessageWriterRepo,
)
from campus_chat.infrastructure.db.repositories.group import (
    GroupMemberReaderRepo,
    GroupMemberWriterRepo,
    GroupMessageReaderRepo,
    GroupMessageWriterRepo,
    GroupReaderRepo,
    GroupWriterRepo,
)
from campus_chat.infrastructure.db.repositories.notification import (
    NotificationReaderRepo,
    NotificationWriterRepo,
)
from campus_chat.infrastructure.db.repositories.thread import (
    ThreadReaderRepo,
    ThreadWriterRepo,
)
from campus_chat.infrastructure.db.repositories.user import UserReaderRepo


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.users = UserReaderRepo(session)
        self.threads = ThreadReaderRepo(session)
        self.threads_w = ThreadWriterRepo(session)
        self.chat_messages = ChatMessageReaderRepo(session)
        self.chat_messages_w = ChatMessageWriterRepo(session)
        self.groups = GroupReaderRepo(session)
        self.groups_w = GroupWriterRepo(session)
        self.group_members = GroupMemberReaderRepo(session)
        self.group_members_w = GroupMemberWriterRepo(session)
        self.group_messages = GroupMessageReaderRepo(session)
        self.group_messages_w = GroupMessageWriterRepo(session)
        self.notifications = NotificationReaderRepo(session)
        self.notifications_w = NotificationWriterRepo(session)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
