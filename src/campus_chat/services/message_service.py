from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from campus_chat.application.dto.principal import Principal
from campus_chat.application.dto.thread import MessageView, ThreadView
from campus_chat.application.exceptions import ForbiddenError, NotFoundError, ValidationError
from campus_chat.application.policies.permissions import assert_thread_access
from campus_chat.application.uow import UnitOfWork
from campus_chat.domain.entities.chat_message import ChatMessage
from campus_chat.domain.value_objects.user_ref import UserRef
from campus_chat.services import notification_triggers
from campus_chat.services.thread_service import load_thread_view

logger = logging.getLogger(__name__)


def _clean_content(content: str | None) -> str:
    text = (content or "").strip()
    if not text:
        raise ValidationError("Message content is required")
    return text


async def send_message(
    thread_id: uuid.UUID,
    principal: Principal,
    content: str,
    uow: UnitOfWork,
) -> ThreadView:
    """Append one message from the caller and return the updated thread.

    The recipient's ``message`` notification is written after the message
    commit as a separate write. If it fails the message stays delivered.
    """
    thread = assert_thread_access(principal, await uow.threads.get_by_id(thread_id))
    text = _clean_content(content)

    now = datetime.now(timezone.utc)
    msg = await uow.chat_messages_w.add(
        ChatMessage(
            id=uuid.uuid4(),
            thread_id=thread.id,
            sender_id=principal.user_id,
            content=text,
            created_at=now,
        )
    )
    await uow.threads_w.touch_updated_at(thread.id, msg.created_at)
    await uow.commit()

    await notification_triggers.notify_new_message(
        principal, thread.other_participant(principal.user_id), thread.id, uow,
    )

    updated = await uow.threads.get_by_id(thread.id)
    return await load_thread_view(updated or thread, uow)


async def _own_message(
    thread_id: uuid.UUID,
    message_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> ChatMessage:
    assert_thread_access(principal, await uow.threads.get_by_id(thread_id))
    msg = await uow.chat_messages.get_by_id(message_id)
    if msg is None or msg.thread_id != thread_id:
        raise NotFoundError("Message not found")
    if msg.sender_id != principal.user_id:
        raise ForbiddenError("Only the sender can change this message")
    return msg


async def edit_message(
    thread_id: uuid.UUID,
    message_id: uuid.UUID,
    principal: Principal,
    content: str,
    uow: UnitOfWork,
) -> MessageView:
    msg = await _own_message(thread_id, message_id, principal, uow)
    text = _clean_content(content)

    edited_at = datetime.now(timezone.utc)
    await uow.chat_messages_w.update_content(msg.id, text, edited_at)
    await uow.commit()

    sender = await uow.users.get_by_id(msg.sender_id)
    return MessageView(
        id=msg.id,
        sender=sender.to_ref() if sender is not None else UserRef.unknown(msg.sender_id),
        content=text,
        timestamp=msg.created_at,
        edited_at=edited_at,
    )


async def delete_message(
    thread_id: uuid.UUID,
    message_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> None:
    msg = await _own_message(thread_id, message_id, principal, uow)
    await uow.chat_messages_w.delete(msg.id)
    await uow.commit()


async def purge_expired_messages(older_than: datetime, uow: UnitOfWork) -> int:
    """Delete direct messages created before ``older_than``."""
    removed = await uow.chat_messages_w.delete_older_than(older_than)
    await uow.commit()
    if removed:
        logger.info("Purged %d direct messages older than %s", removed, older_than.isoformat())
    return removed
