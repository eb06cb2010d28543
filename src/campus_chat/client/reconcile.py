"""Pure helpers that fold server responses into client-side state."""
from __future__ import annotations

from datetime import datetime

from campus_chat.client.models import Notification, Thread, ThreadSummary


def summarize_thread(thread: Thread, user_id: int) -> ThreadSummary:
    last = thread.messages[-1] if thread.messages else None
    return ThreadSummary(
        thread_id=thread.id,
        other_user=thread.other_participant(user_id),
        last_message=last.content if last else None,
        last_message_time=last.timestamp if last else thread.updated_at,
    )


def merge_notifications(
    current: list[Notification],
    incoming: list[Notification],
    *,
    since: datetime | None = None,
) -> tuple[list[Notification], list[Notification]]:
    """Fold unseen notifications into ``current``, newest first.

    Items already held are skipped, as are items created before ``since``.
    Returns (merged, added).
    """
    known = {n.id for n in current}
    added = [
        n for n in incoming
        if n.id not in known and (since is None or n.created_at >= since)
    ]
    if not added:
        return current, []
    added.sort(key=_order_key, reverse=True)
    merged = sorted([*current, *added], key=_order_key, reverse=True)
    return merged, added


def _order_key(n: Notification) -> tuple[datetime, str]:
    return n.created_at, n.id


def newest_timestamp(notifications: list[Notification]) -> datetime | None:
    return max((n.created_at for n in notifications), default=None)
