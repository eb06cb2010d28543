from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import pytest

from campus_chat.client.config import ClientSettings
from campus_chat.client.errors import ForbiddenError, UnavailableError
from campus_chat.client.models import GroupMessage, Message, Notification, Thread, UserRef
from campus_chat.client.session import ClientSession
from campus_chat.client.views import (
    DirectConversationView,
    GroupConversationView,
    NotificationCenter,
    ThreadListView,
    ViewState,
)

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
ASHA = UserRef(id=1, display_name="Asha Rao")
VIKRAM = UserRef(id=2, display_name="Vikram Iyer")

FAST = ClientSettings(
    CHAT_POLL_SECONDS=0.01,
    THREAD_LIST_POLL_SECONDS=0.01,
    NOTIFICATION_POLL_SECONDS=0.01,
    UNREAD_COUNT_POLL_SECONDS=0.01,
)


def _thread(thread_id: str, *contents: str) -> Thread:
    return Thread(
        id=thread_id,
        participants=[ASHA, VIKRAM],
        messages=[
            Message(id=f"{thread_id}-{i}", sender=ASHA, content=c, timestamp=T0 + timedelta(seconds=i))
            for i, c in enumerate(contents)
        ],
        updated_at=T0,
    )


def _notification(nid: str, minutes: int, *, read: bool = False) -> Notification:
    return Notification(
        id=nid, user_id=1, type="like", content="liked", read=read,
        created_at=T0 + timedelta(minutes=minutes),
    )


@dataclass
class FakeApi:
    session: ClientSession = field(default_factory=lambda: ClientSession("tok", 1, "Asha Rao"))
    threads: dict[str, Thread] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    send_error: Exception | None = None
    fetches: int = 0
    sent: list[tuple[str, str]] = field(default_factory=list)
    group_messages: list[GroupMessage] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    unread: int = 0
    marked: list[str] = field(default_factory=list)

    async def get_messages(self, thread_id: str) -> Thread:
        self.fetches += 1
        await asyncio.sleep(self.delays.get(thread_id, 0))
        return self.threads[thread_id]

    async def get_or_create_thread(self, user_id: int) -> Thread:
        return next(iter(self.threads.values()))

    async def send_message(self, thread_id: str, content: str) -> Thread:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((thread_id, content))
        return self.threads[thread_id]

    async def list_threads(self) -> list[Thread]:
        return list(self.threads.values())

    async def list_group_messages(self, group_id: str) -> list[GroupMessage]:
        return list(self.group_messages)

    async def post_group_message(self, group_id: str, message: str) -> GroupMessage:
        msg = GroupMessage(id=f"g{len(self.group_messages)}", group_id=group_id, sender=ASHA, content=message, timestamp=T0)
        self.group_messages.append(msg)
        return msg

    async def list_notifications(self) -> list[Notification]:
        return list(self.notifications)

    async def unread_count(self) -> int:
        return self.unread

    async def mark_read(self, notification_id: str) -> Notification:
        self.marked.append(notification_id)
        return next(n for n in self.notifications if n.id == notification_id)

    async def mark_all_read(self) -> int:
        return 2


@pytest.mark.asyncio
async def test_direct_view_lifecycle():
    api = FakeApi(threads={"t1": _thread("t1", "hi")})
    view = DirectConversationView(api, FAST)

    assert view.state == ViewState.IDLE
    await view.open("t1")
    assert view.state == ViewState.POLLING
    assert [m.content for m in view.messages] == ["hi"]

    api.threads["t1"] = _thread("t1", "hi", "hello back")
    await asyncio.sleep(0.05)
    assert [m.content for m in view.messages] == ["hi", "hello back"]

    await view.close()
    assert view.state == ViewState.IDLE


@pytest.mark.asyncio
async def test_no_writes_after_close():
    api = FakeApi(threads={"t1": _thread("t1", "hi")})
    view = DirectConversationView(api, FAST)
    await view.open("t1")
    await view.close()
    fetches = api.fetches

    api.threads["t1"] = _thread("t1", "hi", "late")
    await asyncio.sleep(0.05)

    assert api.fetches == fetches
    assert [m.content for m in view.messages] == ["hi"]


@pytest.mark.asyncio
async def test_superseded_load_is_ignored():
    api = FakeApi(
        threads={"slow": _thread("slow", "from slow"), "fast": _thread("fast", "from fast")},
        delays={"slow": 0.05},
    )
    view = DirectConversationView(api, FAST)

    slow = asyncio.create_task(view.open("slow"))
    await asyncio.sleep(0.01)
    await view.open("fast")
    await slow

    assert view.thread_id == "fast"
    assert [m.content for m in view.messages] == ["from fast"]
    await view.close()


@pytest.mark.asyncio
async def test_optimistic_send_keeps_temp_until_next_poll():
    api = FakeApi(threads={"t1": _thread("t1")})
    view = DirectConversationView(api, ClientSettings(CHAT_POLL_SECONDS=10))
    await view.open("t1")
    view.draft = "  see you at 5  "

    assert await view.send() is True

    assert view.draft == ""
    assert view.error is None
    [temp] = view.messages
    assert temp.is_temporary and temp.pending
    assert temp.content == "see you at 5"
    assert temp.sender.display_name == "Asha Rao"
    assert api.sent == [("t1", "see you at 5")]
    await view.close()


@pytest.mark.asyncio
async def test_failed_send_restores_draft():
    api = FakeApi(threads={"t1": _thread("t1", "hi")}, send_error=UnavailableError("offline"))
    view = DirectConversationView(api, ClientSettings(CHAT_POLL_SECONDS=10))
    await view.open("t1")

    assert await view.send("are you there?") is False

    assert [m.content for m in view.messages] == ["hi"]
    assert view.draft == "are you there?"
    assert view.error == "offline"
    await view.close()


@pytest.mark.asyncio
async def test_send_without_open_thread_is_noop():
    api = FakeApi()
    view = DirectConversationView(api, FAST)

    assert await view.send("hello") is False
    assert api.sent == []


@pytest.mark.asyncio
async def test_open_failure_returns_to_idle():
    api = FakeApi()

    async def forbidden(thread_id: str) -> Thread:
        raise ForbiddenError("Not a participant of this chat", 403)

    api.get_messages = forbidden  # type: ignore[method-assign]
    view = DirectConversationView(api, FAST)

    with pytest.raises(ForbiddenError):
        await view.open("t9")
    assert view.state == ViewState.IDLE
    assert view.thread_id is None


@pytest.mark.asyncio
async def test_group_send_posts_then_refreshes():
    api = FakeApi()
    view = GroupConversationView(api, ClientSettings(CHAT_POLL_SECONDS=10))
    await view.open("world")

    posted = await view.send(" hello campus ")

    assert posted.content == "hello campus"
    assert [m.content for m in view.messages] == ["hello campus"]
    await view.close()
    assert view.state == ViewState.IDLE


@pytest.mark.asyncio
async def test_group_send_survives_failed_refresh():
    api = FakeApi()
    view = GroupConversationView(api, ClientSettings(CHAT_POLL_SECONDS=10))
    await view.open("world")

    async def offline(group_id: str) -> list[GroupMessage]:
        raise UnavailableError("blip")

    api.list_group_messages = offline  # type: ignore[method-assign]
    posted = await view.send("hello")

    assert posted is not None
    assert posted.content == "hello"
    assert [m.content for m in api.group_messages] == ["hello"]
    await view.close()

@pytest.mark.asyncio
async def test_thread_list_summaries():
    api = FakeApi(threads={"t1": _thread("t1", "hi")})
    view = ThreadListView(api, FAST)

    await view.start()
    [summary] = view.threads
    assert summary.other_user == VIKRAM
    assert summary.last_message == "hi"
    assert summary.last_message_time == T0

    api.threads["t1"] = _thread("t1", "hi", "new")
    await asyncio.sleep(0.05)
    assert view.threads[0].last_message == "new"

    await view.stop()
    api.threads["t1"] = _thread("t1", "hi", "new", "after stop")
    await asyncio.sleep(0.03)
    assert view.threads[0].last_message == "new"


@pytest.mark.asyncio
async def test_thread_list_note_sent():
    api = FakeApi(threads={"t1": _thread("t1", "hi")})
    view = ThreadListView(api, ClientSettings(THREAD_LIST_POLL_SECONDS=10))
    await view.start()

    view.note_sent("t1", "on my way", T0 + timedelta(minutes=1))

    assert view.threads[0].last_message == "on my way"
    assert view.threads[0].last_message_time == T0 + timedelta(minutes=1)
    await view.stop()


@pytest.mark.asyncio
async def test_notification_center_merges_new_items():
    api = FakeApi(notifications=[_notification("a", 1)])
    center = NotificationCenter(api, ClientSettings(NOTIFICATION_POLL_SECONDS=0.01, UNREAD_COUNT_POLL_SECONDS=10))

    await center.start()
    assert center.unread_count == 1

    api.notifications = [_notification("b", 2), _notification("a", 1)]
    await asyncio.sleep(0.05)

    assert [n.id for n in center.notifications] == ["b", "a"]
    assert center.unread_count == 2
    assert center.newest_at == T0 + timedelta(minutes=2)
    await center.stop()


@pytest.mark.asyncio
async def test_notification_mark_read_decrements_once():
    api = FakeApi(notifications=[_notification("a", 1), _notification("b", 2, read=True)])
    center = NotificationCenter(api, ClientSettings(NOTIFICATION_POLL_SECONDS=10, UNREAD_COUNT_POLL_SECONDS=10))
    await center.start()

    await center.mark_read("a")
    await center.mark_read("a")
    await center.mark_read("b")

    assert center.unread_count == 0
    assert all(n.read for n in center.notifications)
    assert api.marked == ["a", "a", "b"]
    await center.stop()


@pytest.mark.asyncio
async def test_notification_mark_all_read_zeroes():
    api = FakeApi(notifications=[_notification("a", 1), _notification("b", 2)])
    center = NotificationCenter(api, ClientSettings(NOTIFICATION_POLL_SECONDS=10, UNREAD_COUNT_POLL_SECONDS=10))
    await center.start()

    assert await center.mark_all_read() == 2
    assert center.unread_count == 0
    assert all(n.read for n in center.notifications)
    await center.stop()


@pytest.mark.asyncio
async def test_unread_count_poll_overwrites_local():
    api = FakeApi(unread=5)
    center = NotificationCenter(api, ClientSettings(NOTIFICATION_POLL_SECONDS=10, UNREAD_COUNT_POLL_SECONDS=0.01))
    await center.start()
    assert center.unread_count == 0

    await asyncio.sleep(0.05)
    assert center.unread_count == 5
    await center.stop()


@pytest.mark.asyncio
async def test_notification_poll_ignores_items_older_than_newest_seen():
    api = FakeApi(notifications=[_notification("n2", 2)])
    center = NotificationCenter(api, ClientSettings(NOTIFICATION_POLL_SECONDS=0.01, UNREAD_COUNT_POLL_SECONDS=10))
    await center.start()

    api.notifications = [_notification("n3", 3), _notification("n2", 2), _notification("n1", 1)]
    await asyncio.sleep(0.05)

    assert [n.id for n in center.notifications] == ["n3", "n2"]
    assert center.unread_count == 2
    assert center.newest_at == T0 + timedelta(minutes=3)
    await center.stop()


@pytest.mark.asyncio
async def test_notification_refresh_after_stop_writes_nothing():
    api = FakeApi(notifications=[_notification("a", 1)])
    center = NotificationCenter(api, ClientSettings(NOTIFICATION_POLL_SECONDS=10, UNREAD_COUNT_POLL_SECONDS=10))
    await center.start()
    release = asyncio.Event()

    async def slow_list() -> list[Notification]:
        await release.wait()
        return [_notification("b", 2), _notification("a", 1)]

    api.list_notifications = slow_list  # type: ignore[method-assign]
    pending = asyncio.create_task(center.refresh())
    await asyncio.sleep(0)
    await center.stop()
    release.set()
    await pending

    assert [n.id for n in center.notifications] == ["a"]
    assert center.unread_count == 1
    assert center.newest_at == T0 + timedelta(minutes=1)
    assert center.loading is False
