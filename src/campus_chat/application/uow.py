from __future__ import annotations

from typing import Protocol

from campus_chat.application.repositories.chat_message import (
    ChatMessageReader,
    ChatMessageWriter,
)
from campus_chat.application.repositories.group import (
    GroupMemberReader,
    GroupMemberWriter,
    GroupMessageReader,
    GroupMessageWriter,
    GroupReader,
    GroupWriter,
)
from campus_chat.application.repositories.notification import (
    NotificationReader,
    NotificationWriter,
)
from campus_chat.application.repositories.thread import ThreadReader, ThreadWriter
from campus_chat.application.repositories.user import UserReader


class UnitOfWork(Protocol):
    users: UserReader
    threads: ThreadReader
    threads_w: ThreadWriter
    chat_messages: ChatMessageReader
    chat_messages_w: ChatMessageWriter
    groups: GroupReader
    groups_w: GroupWriter
    group_members: GroupMemberReader
    group_members_w: GroupMemberWriter
    group_messages: GroupMessageReader
    group_messages_w: GroupMessageWriter
    notifications: NotificationReader
    notifications_w: NotificationWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
