"""Shared test fixtures."""
from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable
from uuid import UUID

import pytest

from campus_chat.application.dto.principal import Principal
from campus_chat.domain.entities.chat_message import ChatMessage
from campus_chat.domain.entities.group_chat import GroupChat
from campus_chat.domain.entities.group_message import GroupMessage
from campus_chat.domain.entities.notification import Notification
from campus_chat.domain.entities.thread import Thread, ordered_pair
from campus_chat.domain.entities.user import User
from campus_chat.domain.value_objects.enums import GroupType, NotificationType, UserRole

ASHA = 1
VIKRAM = 2
MEERA = 3
ADMIN = 9


def make_user(user_id: int, name: str | None = None, *, role: str = UserRole.STUDENT) -> User:
    username = (name or f"user{user_id}").split()[0].lower()
    return User(
        id=user_id,
        username=username,
        name=name,
        email=f"{username}@campus.test",
        role=role,
    )


def make_thread(user_a: int, user_b: int, *, updated_at: datetime | None = None) -> Thread:
    now = datetime.now(timezone.utc)
    low, high = ordered_pair(user_a, user_b)
    return Thread(
        id=uuid.uuid4(),
        user_low=low,
        user_high=high,
        created_at=now,
        updated_at=updated_at or now,
    )


def make_group(
    *,
    created_by: int | None = ASHA,
    type: str = GroupType.CUSTOM,
    name: str = "Robotics Club",
) -> GroupChat:
    return GroupChat(
        id=uuid.uuid4(),
        name=name,
        description="",
        type=type,
        club_id=7 if type == GroupType.CLUB else None,
        created_by=created_by,
        created_at=datetime.now(timezone.utc),
    )


def make_notification(
    user_id: int,
    *,
    read: bool = False,
    created_at: datetime | None = None,
    type: str = NotificationType.LIKE,
) -> Notification:
    return Notification(
        id=uuid.uuid4(),
        user_id=user_id,
        type=type,
        content="Vikram Iyer liked your post",
        related_id="post-1",
        read=read,
        created_at=created_at or datetime.now(timezone.utc),
    )


@pytest.fixture
def asha() -> Principal:
    return Principal(user_id=ASHA, display_name="Asha Rao")


@pytest.fixture
def vikram() -> Principal:
    return Principal(user_id=VIKRAM, display_name="Vikram Iyer")


@pytest.fixture
def meera() -> Principal:
    return Principal(user_id=MEERA, display_name="Meera Nair")


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=ADMIN, role=UserRole.ADMIN, display_name="Campus Admin")


@pytest.fixture
def uow() -> FakeUoW:
    return make_uow()


def make_uow() -> FakeUoW:
    fake = FakeUoW()
    fake.users.add(
        make_user(ASHA, "Asha Rao"),
        make_user(VIKRAM, "Vikram Iyer"),
        make_user(MEERA, "Meera Nair"),
        make_user(ADMIN, "Campus Admin", role=UserRole.ADMIN),
    )
    return fake


@dataclass
class FakeUserReader:
    _users: dict[int, User] = field(default_factory=dict)

    def add(self, *users: User) -> None:
        for u in users:
            self._users[u.id] = u

    async def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_many(self, user_ids: Iterable[int]) -> dict[int, User]:
        return {uid: self._users[uid] for uid in set(user_ids) if uid in self._users}

    async def list_ids(self) -> list[int]:
        return sorted(self._users)


@dataclass
class FakeThreadReader:
    _store: dict[UUID, Thread] = field(default_factory=dict)

    async def get_by_id(self, thread_id: UUID) -> Thread | None:
        return self._store.get(thread_id)

    async def get_by_pair(self, user_a: int, user_b: int) -> Thread | None:
        low, high = ordered_pair(user_a, user_b)
        for t in self._store.values():
            if (t.user_low, t.user_high) == (low, high):
                return t
        return None

    async def list_for_user(self, user_id: int) -> list[Thread]:
        mine = [t for t in self._store.values() if t.has_participant(user_id)]
        return sorted(mine, key=lambda t: t.updated_at, reverse=True)


@dataclass
class FakeThreadWriter:
    _reader: FakeThreadReader
    created: int = 0

    async def create_if_not_exists(self, thread: Thread) -> tuple[Thread, bool]:
        existing = await self._reader.get_by_pair(thread.user_low, thread.user_high)
        if existing is not None:
            return existing, False
        self._reader._store[thread.id] = thread
        self.created += 1
        return thread, True

    async def touch_updated_at(self, thread_id: UUID, ts: datetime) -> None:
        thread = self._reader._store[thread_id]
        self._reader._store[thread_id] = dataclasses.replace(thread, updated_at=ts)


@dataclass
class FakeChatMessageReader:
    _messages: list[ChatMessage] = field(default_factory=list)

    async def get_by_id(self, message_id: UUID) -> ChatMessage | None:
        return next((m for m in self._messages if m.id == message_id), None)

    async def list_for_thread(self, thread_id: UUID) -> list[ChatMessage]:
        return [m for m in self._messages if m.thread_id == thread_id]

    async def list_for_threads(self, thread_ids: Iterable[UUID]) -> dict[UUID, list[ChatMessage]]:
        ids = set(thread_ids)
        grouped: dict[UUID, list[ChatMessage]] = {}
        for m in self._messages:
            if m.thread_id in ids:
                grouped.setdefault(m.thread_id, []).append(m)
        return grouped


@dataclass
class FakeChatMessageWriter:
    _reader: FakeChatMessageReader

    async def add(self, message: ChatMessage) -> ChatMessage:
        self._reader._messages.append(message)
        return message

    async def update_content(self, message_id: UUID, content: str, edited_at: datetime) -> None:
        msgs = self._reader._messages
        for i, m in enumerate(msgs):
            if m.id == message_id:
                msgs[i] = dataclasses.replace(m, content=content, edited_at=edited_at)

    async def delete(self, message_id: UUID) -> None:
        self._reader._messages[:] = [m for m in self._reader._messages if m.id != message_id]

    async def delete_older_than(self, ts: datetime) -> int:
        before = len(self._reader._messages)
        self._reader._messages[:] = [m for m in self._reader._messages if m.created_at >= ts]
        return before - len(self._reader._messages)


@dataclass
class FakeGroupMemberReader:
    _members: list[tuple[UUID, int]] = field(default_factory=list)

    async def is_member(self, group_id: UUID, user_id: int) -> bool:
        return (group_id, user_id) in self._members

    async def list_member_ids(self, group_id: UUID) -> list[int]:
        return [uid for gid, uid in self._members if gid == group_id]


@dataclass
class FakeGroupMemberWriter:
    _reader: FakeGroupMemberReader

    async def add_many(self, group_id: UUID, user_ids: Iterable[int], added_at: datetime) -> None:
        for uid in user_ids:
            if (group_id, uid) not in self._reader._members:
                self._reader._members.append((group_id, uid))

    async def remove(self, group_id: UUID, user_id: int) -> bool:
        if (group_id, user_id) not in self._reader._members:
            return False
        self._reader._members.remove((group_id, user_id))
        return True


@dataclass
class FakeGroupReader:
    _members: FakeGroupMemberReader
    _store: dict[UUID, GroupChat] = field(default_factory=dict)

    async def get_by_id(self, group_id: UUID) -> GroupChat | None:
        return self._store.get(group_id)

    async def get_world(self) -> GroupChat | None:
        return next((g for g in self._store.values() if g.is_world), None)

    async def list_for_user(self, user_id: int) -> list[GroupChat]:
        visible = [
            g for g in self._store.values()
            if g.is_world or g.is_creator(user_id) or (g.id, user_id) in self._members._members
        ]
        return sorted(visible, key=lambda g: g.created_at, reverse=True)


@dataclass
class FakeGroupWriter:
    _reader: FakeGroupReader

    async def create(self, group: GroupChat) -> GroupChat:
        self._reader._store[group.id] = group
        return group


@dataclass
class FakeGroupMessageReader:
    _messages: list[GroupMessage] = field(default_factory=list)

    async def list_recent(self, group_id: UUID, *, limit: int) -> list[GroupMessage]:
        mine = [m for m in self._messages if m.group_id == group_id]
        return mine[-limit:]


@dataclass
class FakeGroupMessageWriter:
    _reader: FakeGroupMessageReader

    async def add(self, message: GroupMessage) -> GroupMessage:
        self._reader._messages.append(message)
        return message


@dataclass
class FakeNotificationReader:
    _store: dict[UUID, Notification] = field(default_factory=dict)

    def add(self, *notifications: Notification) -> None:
        for n in notifications:
            self._store[n.id] = n

    async def get_by_id(self, notification_id: UUID) -> Notification | None:
        return self._store.get(notification_id)

    async def list_for_user(self, user_id: int, *, limit: int | None = None) -> list[Notification]:
        mine = [n for n in self._store.values() if n.user_id == user_id]
        mine.sort(key=lambda n: (n.created_at, n.id), reverse=True)
        return mine if limit is None else mine[:limit]

    async def count_unread(self, user_id: int) -> int:
        return sum(1 for n in self._store.values() if n.user_id == user_id and not n.read)


@dataclass
class FakeNotificationWriter:
    _reader: FakeNotificationReader
    fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def add(self, notification: Notification) -> Notification:
        self._check()
        self._reader._store[notification.id] = notification
        return notification

    async def add_many(self, notifications: list[Notification]) -> None:
        self._check()
        for n in notifications:
            self._reader._store[n.id] = n

    async def mark_read(self, notification_id: UUID) -> None:
        n = self._reader._store[notification_id]
        self._reader._store[notification_id] = dataclasses.replace(n, read=True)

    async def mark_all_read(self, user_id: int) -> int:
        flipped = 0
        for nid, n in list(self._reader._store.items()):
            if n.user_id == user_id and not n.read:
                self._reader._store[nid] = dataclasses.replace(n, read=True)
                flipped += 1
        return flipped


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    users: FakeUserReader = field(default_factory=FakeUserReader)
    threads: FakeThreadReader = field(default_factory=FakeThreadReader)
    threads_w: FakeThreadWriter | None = None
    chat_messages: FakeChatMessageReader = field(default_factory=FakeChatMessageReader)
    chat_messages_w: FakeChatMessageWriter | None = None
    group_members: FakeGroupMemberReader = field(default_factory=FakeGroupMemberReader)
    group_members_w: FakeGroupMemberWriter | None = None
    groups: FakeGroupReader | None = None
    groups_w: FakeGroupWriter | None = None
    group_messages: FakeGroupMessageReader = field(default_factory=FakeGroupMessageReader)
    group_messages_w: FakeGroupMessageWriter | None = None
    notifications: FakeNotificationReader = field(default_factory=FakeNotificationReader)
    notifications_w: FakeNotificationWriter | None = None
    _committed: bool = False
    rollbacks: int = 0

    def __post_init__(self) -> None:
        self.threads_w = FakeThreadWriter(self.threads)
        self.chat_messages_w = FakeChatMessageWriter(self.chat_messages)
        self.group_members_w = FakeGroupMemberWriter(self.group_members)
        self.groups = FakeGroupReader(self.group_members)
        self.groups_w = FakeGroupWriter(self.groups)
        self.group_messages_w = FakeGroupMessageWriter(self.group_messages)
        self.notifications_w = FakeNotificationWriter(self.notifications)

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        self.rollbacks += 1


def minutes_ago(n: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=n)
