"""Polling view-models for direct chats, group chats, the thread list and notifications.

Each view owns at most one PollLoop per concern. Results that arrive for a
target the view no longer shows, or after ``close()``, are dropped.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from enum import StrEnum

from campus_chat.client.api import CampusApiClient
from campus_chat.client.config import ClientSettings
from campus_chat.client.errors import ApiError
from campus_chat.client.models import (
    UNKNOWN_DISPLAY_NAME,
    GroupMessage,
    Message,
    Notification,
    Thread,
    ThreadSummary,
    UserRef,
)
from campus_chat.client.poller import PollLoop
from campus_chat.client.reconcile import merge_notifications, newest_timestamp, summarize_thread

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"


class ViewState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    POLLING = "polling"


class DirectConversationView:
    def __init__(self, api: CampusApiClient, settings: ClientSettings | None = None) -> None:
        self._api = api
        self._settings = settings or ClientSettings()
        self._poll: PollLoop | None = None

        self.state = ViewState.IDLE
        self.thread_id: str | None = None
        self.participants: list[UserRef] = []
        self.messages: list[Message] = []
        self.draft = ""
        self.error: str | None = None

    async def open(self, thread_id: str) -> None:
        """Show ``thread_id`` and start polling it. Replaces any current target."""
        await self._retarget(thread_id)
        try:
            thread = await self._api.get_messages(thread_id)
        except ApiError:
            if self.thread_id == thread_id:
                self.thread_id = None
                self.state = ViewState.IDLE
            raise
        self._start(thread_id, thread)

    async def open_with_user(self, user_id: int) -> str:
        """Resolve (or create) the thread with ``user_id`` and show it."""
        thread = await self._api.get_or_create_thread(user_id)
        await self._retarget(thread.id)
        self._start(thread.id, thread)
        return thread.id

    async def close(self) -> None:
        self.thread_id = None
        await self._stop_poll()
        self.state = ViewState.IDLE

    async def send(self, content: str | None = None) -> bool:
        """Optimistically send ``content`` (or the draft) to the open thread.

        The temporary message stays until the next poll replaces the list.
        On failure it is removed, the draft is restored and ``error`` set.
        """
        target = self.thread_id
        text = (self.draft if content is None else content).strip()
        if target is None or not text:
            return False

        me = self._api.session
        temp = Message(
            id=f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}",
            sender=UserRef(id=me.user_id, display_name=me.display_name or UNKNOWN_DISPLAY_NAME),
            content=text,
            timestamp=datetime.now(timezone.utc),
            pending=True,
        )
        self.messages = [*self.messages, temp]
        self.draft = ""
        self.error = None

        try:
            await self._api.send_message(target, text)
        except ApiError as exc:
            logger.warning("Send to thread %s failed: %s", target, exc.detail)
            if self.thread_id == target:
                self.messages = [m for m in self.messages if m.id != temp.id]
                self.draft = text
                self.error = exc.detail or "Failed to send message"
            return False
        return True

    async def _retarget(self, thread_id: str) -> None:
        await self._stop_poll()
        self.thread_id = thread_id
        self.participants = []
        self.messages = []
        self.error = None
        self.state = ViewState.LOADING

    def _start(self, target: str, thread: Thread) -> None:
        if self.thread_id != target:
            return
        self._apply(thread)

        async def tick() -> None:
            await self._refresh(target)

        self._poll = PollLoop(self._settings.CHAT_POLL_SECONDS, tick, name=f"chat:{target}")
        self._poll.start()
        self.state = ViewState.POLLING

    async def _refresh(self, target: str) -> None:
        thread = await self._api.get_messages(target)
        if self.thread_id != target:
            return
        self._apply(thread)

    def _apply(self, thread: Thread) -> None:
        self.participants = list(thread.participants)
        self.messages = list(thread.messages)

    async def _stop_poll(self) -> None:
        poll, self._poll = self._poll, None
        if poll is not None:
            await poll.stop()


class GroupConversationView:
    def __init__(self, api: CampusApiClient, settings: ClientSettings | None = None) -> None:
        self._api = api
        self._settings = settings or ClientSettings()
        self._poll: PollLoop | None = None

        self.state = ViewState.IDLE
        self.group_id: str | None = None
        self.messages: list[GroupMessage] = []

    async def open(self, group_id: str) -> None:
        await self._stop_poll()
        self.group_id = group_id
        self.messages = []
        self.state = ViewState.LOADING
        try:
            messages = await self._api.list_group_messages(group_id)
        except ApiError:
            if self.group_id == group_id:
                self.group_id = None
                self.state = ViewState.IDLE
            raise
        if self.group_id != group_id:
            return
        self.messages = messages

        async def tick() -> None:
            await self._refresh(group_id)

        self._poll = PollLoop(self._settings.CHAT_POLL_SECONDS, tick, name=f"group:{group_id}")
        self._poll.start()
        self.state = ViewState.POLLING

    async def close(self) -> None:
        self.group_id = None
        await self._stop_poll()
        self.state = ViewState.IDLE

    async def send(self, message: str) -> GroupMessage | None:
        """Post to the open group, then refresh.

        A failed post propagates to the caller. A failed refresh only logs,
        the next poll picks the message up.
        """
        target = self.group_id
        text = message.strip()
        if target is None or not text:
            return None
        posted = await self._api.post_group_message(target, text)
        try:
            await self._refresh(target)
        except ApiError as exc:
            logger.warning("Refreshing group %s after send failed: %s", target, exc.detail)
        return posted

    async def _refresh(self, target: str) -> None:
        messages = await self._api.list_group_messages(target)
        if self.group_id != target:
            return
        self.messages = messages

    async def _stop_poll(self) -> None:
        poll, self._poll = self._poll, None
        if poll is not None:
            await poll.stop()


class ThreadListView:
    def __init__(self, api: CampusApiClient, settings: ClientSettings | None = None) -> None:
        self._api = api
        self._settings = settings or ClientSettings()
        self._poll: PollLoop | None = None
        self._active = False

        self.state = ViewState.IDLE
        self.threads: list[ThreadSummary] = []

    async def start(self) -> None:
        await self.stop()
        self._active = True
        self.state = ViewState.LOADING
        try:
            await self._refresh()
        except ApiError:
            self._active = False
            self.state = ViewState.IDLE
            raise
        if not self._active:
            return
        self._poll = PollLoop(
            self._settings.THREAD_LIST_POLL_SECONDS, self._refresh, name="thread-list",
        )
        self._poll.start()
        self.state = ViewState.POLLING

    async def stop(self) -> None:
        self._active = False
        poll, self._poll = self._poll, None
        if poll is not None:
            await poll.stop()
        self.state = ViewState.IDLE

    def note_sent(self, thread_id: str, content: str, at: datetime) -> None:
        """Reflect a just-sent message before the next poll arrives."""
        self.threads = [
            t.model_copy(update={"last_message": content, "last_message_time": at})
            if t.thread_id == thread_id else t
            for t in self.threads
        ]

    async def _refresh(self) -> None:
        threads = await self._api.list_threads()
        if not self._active:
            return
        me = self._api.session.user_id
        self.threads = [summarize_thread(t, me) for t in threads]


class NotificationCenter:
    def __init__(self, api: CampusApiClient, settings: ClientSettings | None = None) -> None:
        self._api = api
        self._settings = settings or ClientSettings()
        self._list_poll: PollLoop | None = None
        self._count_poll: PollLoop | None = None
        self._active = False

        self.notifications: list[Notification] = []
        self.unread_count = 0
        self.newest_at: datetime | None = None
        self.loading = False
        self.error: str | None = None

    async def start(self) -> None:
        await self.stop()
        self._active = True
        await self._load()
        if not self._active:
            return
        self._list_poll = PollLoop(
            self._settings.NOTIFICATION_POLL_SECONDS, self._poll_list, name="notifications",
        )
        self._count_poll = PollLoop(
            self._settings.UNREAD_COUNT_POLL_SECONDS, self._poll_count, name="unread-count",
        )
        self._list_poll.start()
        self._count_poll.start()

    async def stop(self) -> None:
        self._active = False
        for poll in (self._list_poll, self._count_poll):
            if poll is not None:
                await poll.stop()
        self._list_poll = self._count_poll = None

    async def refresh(self) -> None:
        """Full reload while started. A failure is kept in ``error`` and polling carries on."""
        await self._load()

    async def _load(self) -> None:
        self.loading = True
        self.error = None
        try:
            items = await self._api.list_notifications()
        except ApiError as exc:
            logger.warning("Loading notifications failed: %s", exc.detail)
            if self._active:
                self.error = "Failed to load notifications"
            return
        finally:
            self.loading = False
        if not self._active:
            return
        self.notifications = items
        self.unread_count = sum(1 for n in items if not n.read)
        self.newest_at = newest_timestamp(items)

    async def mark_read(self, notification_id: str) -> None:
        await self._api.mark_read(notification_id)
        updated: list[Notification] = []
        for n in self.notifications:
            if n.id == notification_id and not n.read:
                self.unread_count = max(0, self.unread_count - 1)
                n = n.model_copy(update={"read": True})
            updated.append(n)
        self.notifications = updated

    async def mark_all_read(self) -> int:
        changed = await self._api.mark_all_read()
        self.notifications = [
            n if n.read else n.model_copy(update={"read": True})
            for n in self.notifications
        ]
        self.unread_count = 0
        return changed

    async def _poll_list(self) -> None:
        incoming = await self._api.list_notifications()
        if not self._active:
            return
        merged, added = merge_notifications(self.notifications, incoming, since=self.newest_at)
        if not added:
            return
        self.notifications = merged
        self.unread_count += sum(1 for n in added if not n.read)
        self.newest_at = newest_timestamp(merged)

    async def _poll_count(self) -> None:
        count = await self._api.unread_count()
        if self._active:
            self.unread_count = count
