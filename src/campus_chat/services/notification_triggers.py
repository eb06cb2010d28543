"""Notification fan-out for events raised by other campus flows.

Each trigger is a single, independent write. A failure is logged and rolled
back without failing the action that raised it: the like, comment, status
change or message has already happened by the time we get here.
"""
from __future__ import annotations

import logging
import uuid

from campus_chat.application.dto.notification import CreateNotificationDTO
from campus_chat.application.dto.principal import Principal
from campus_chat.application.uow import UnitOfWork
from campus_chat.domain.entities.notification import Notification
from campus_chat.domain.value_objects.enums import NotificationType
from campus_chat.domain.value_objects.user_ref import UNKNOWN_DISPLAY_NAME
from campus_chat.services import notification_service

logger = logging.getLogger(__name__)


async def _actor_name(actor: Principal, uow: UnitOfWork) -> str:
    if actor.display_name:
        return actor.display_name
    user = await uow.users.get_by_id(actor.user_id)
    return user.display_name if user is not None else UNKNOWN_DISPLAY_NAME


async def _emit(data: CreateNotificationDTO, uow: UnitOfWork) -> Notification | None:
    try:
        return await notification_service.create_notification(data, uow)
    except Exception:
        logger.exception(
            "Notification creation failed (type=%s, user=%d)", data.type, data.user_id,
        )
        await uow.rollback()
        return None


async def notify_like(
    actor: Principal,
    owner_id: int,
    content_type: str,
    content_id: str,
    uow: UnitOfWork,
) -> Notification | None:
    if owner_id == actor.user_id:
        return None
    name = await _actor_name(actor, uow)
    return await _emit(
        CreateNotificationDTO(
            user_id=owner_id,
            type=NotificationType.LIKE,
            content=f"{name} liked your {content_type}",
            related_id=content_id,
        ),
        uow,
    )


async def notify_comment(
    actor: Principal,
    owner_id: int,
    content_type: str,
    content_id: str,
    uow: UnitOfWork,
) -> Notification | None:
    if owner_id == actor.user_id:
        return None
    name = await _actor_name(actor, uow)
    return await _emit(
        CreateNotificationDTO(
            user_id=owner_id,
            type=NotificationType.COMMENT,
            content=f"{name} commented on your {content_type}",
            related_id=content_id,
        ),
        uow,
    )


async def notify_od_status(
    student_id: int,
    event_name: str,
    status: str,
    claim_id: str,
    uow: UnitOfWork,
) -> Notification | None:
    return await _emit(
        CreateNotificationDTO(
            user_id=student_id,
            type=NotificationType.OD_STATUS,
            content=f'Your OD claim for "{event_name}" has been {status}',
            related_id=claim_id,
        ),
        uow,
    )


async def notify_query_response(
    submitter_id: int,
    title: str,
    query_id: str,
    uow: UnitOfWork,
) -> Notification | None:
    return await _emit(
        CreateNotificationDTO(
            user_id=submitter_id,
            type=NotificationType.QUERY_RESPONSE,
            content=f'Your query "{title}" has been responded to',
            related_id=query_id,
        ),
        uow,
    )


async def notify_announcement(
    author_id: int,
    title: str,
    announcement_id: str,
    uow: UnitOfWork,
) -> int:
    """Broadcast a new announcement to every user except its author. Return recipients notified."""
    try:
        recipients = [uid for uid in await uow.users.list_ids() if uid != author_id]
        notifications = [
            notification_service.new_notification(
                CreateNotificationDTO(
                    user_id=uid,
                    type=NotificationType.ANNOUNCEMENT,
                    content=f"New announcement: {title}",
                    related_id=announcement_id,
                )
            )
            for uid in recipients
        ]
        if notifications:
            await uow.notifications_w.add_many(notifications)
            await uow.commit()
    except Exception:
        logger.exception("Announcement fan-out failed for %s", announcement_id)
        await uow.rollback()
        return 0
    return len(notifications)


async def notify_new_message(
    sender: Principal,
    recipient_id: int,
    thread_id: uuid.UUID,
    uow: UnitOfWork,
) -> Notification | None:
    if recipient_id == sender.user_id:
        return None
    name = await _actor_name(sender, uow)
    return await _emit(
        CreateNotificationDTO(
            user_id=recipient_id,
            type=NotificationType.MESSAGE,
            content=f"New message from {name}",
            related_id=str(thread_id),
        ),
        uow,
    )
