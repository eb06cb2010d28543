from __future__ import annotations

import uuid
from datetime import datetime, timezone

from campus_chat.application.dto.principal import Principal
from campus_chat.application.dto.thread import MessageView, ThreadView
from campus_chat.application.exceptions import NotFoundError, ValidationError
from campus_chat.application.policies.permissions import assert_thread_access
from campus_chat.application.uow import UnitOfWork
from campus_chat.domain.entities.chat_message import ChatMessage
from campus_chat.domain.entities.thread import Thread, ordered_pair
from campus_chat.domain.entities.user import User
from campus_chat.domain.value_objects.user_ref import UserRef


def _ref(users: dict[int, User], user_id: int) -> UserRef:
    user = users.get(user_id)
    return user.to_ref() if user is not None else UserRef.unknown(user_id)


def build_thread_view(
    thread: Thread,
    messages: list[ChatMessage],
    users: dict[int, User],
) -> ThreadView:
    return ThreadView(
        id=thread.id,
        participants=[_ref(users, uid) for uid in thread.participant_ids],
        messages=[
            MessageView(
                id=m.id,
                sender=_ref(users, m.sender_id),
                content=m.content,
                timestamp=m.created_at,
                edited_at=m.edited_at,
            )
            for m in messages
        ],
        created_at=thread.created_at,
        updated_at=thread.updated_at,
    )


async def load_thread_view(thread: Thread, uow: UnitOfWork) -> ThreadView:
    messages = await uow.chat_messages.list_for_thread(thread.id)
    user_ids = set(thread.participant_ids) | {m.sender_id for m in messages}
    users = await uow.users.get_many(user_ids)
    return build_thread_view(thread, messages, users)


async def get_or_create_thread(
    other_user_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> ThreadView:
    """Return the thread between the caller and ``other_user_id``, creating it on first use.

    Idempotent for the unordered pair: A->B and B->A resolve to the same thread.
    """
    if other_user_id == principal.user_id:
        raise ValidationError("Cannot start a chat with yourself")

    other = await uow.users.get_by_id(other_user_id)
    if other is None:
        raise NotFoundError("User not found")

    existing = await uow.threads.get_by_pair(principal.user_id, other_user_id)
    if existing is not None:
        return await load_thread_view(existing, uow)

    now = datetime.now(timezone.utc)
    low, high = ordered_pair(principal.user_id, other_user_id)
    thread, created = await uow.threads_w.create_if_not_exists(
        Thread(
            id=uuid.uuid4(),
            user_low=low,
            user_high=high,
            created_at=now,
            updated_at=now,
        )
    )
    if created:
        await uow.commit()
    return await load_thread_view(thread, uow)


async def list_threads(
    principal: Principal,
    uow: UnitOfWork,
) -> list[ThreadView]:
    threads = await uow.threads.list_for_user(principal.user_id)
    if not threads:
        return []

    by_thread = await uow.chat_messages.list_for_threads([t.id for t in threads])
    user_ids: set[int] = set()
    for t in threads:
        user_ids.update(t.participant_ids)
    for messages in by_thread.values():
        user_ids.update(m.sender_id for m in messages)
    users = await uow.users.get_many(user_ids)

    return [build_thread_view(t, by_thread.get(t.id, []), users) for t in threads]


async def get_messages(
    thread_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> ThreadView:
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))
    return await load_thread_view(thread, uow)
