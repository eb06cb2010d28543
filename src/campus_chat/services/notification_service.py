from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from campus_chat.application.dto.notification import CreateNotificationDTO
from campus_chat.application.dto.principal import Principal
from campus_chat.application.exceptions import NotFoundError, ValidationError
from campus_chat.application.policies.permissions import (
    assert_notification_owner,
    assert_self,
    assert_self_or_admin,
)
from campus_chat.application.uow import UnitOfWork
from campus_chat.domain.entities.notification import Notification
from campus_chat.domain.value_objects.enums import NotificationType

logger = logging.getLogger(__name__)


def _validate(data: CreateNotificationDTO) -> NotificationType:
    try:
        ntype = NotificationType(data.type)
    except ValueError as exc:
        raise ValidationError("Invalid notification type") from exc
    if not data.content or not data.content.strip():
        raise ValidationError("Notification content is required")
    return ntype


def new_notification(data: CreateNotificationDTO) -> Notification:
    ntype = _validate(data)
    return Notification(
        id=uuid.uuid4(),
        user_id=data.user_id,
        type=ntype.value,
        content=data.content.strip(),
        related_id=data.related_id,
        read=False,
        created_at=datetime.now(timezone.utc),
    )


async def create_notification(
    data: CreateNotificationDTO,
    uow: UnitOfWork,
) -> Notification:
    """Persist one notification for ``data.user_id``.

    Internal-use: called by the flows that trigger notifications, never by
    the recipient. Repeated triggers produce repeated notifications.
    """
    notification = new_notification(data)
    if await uow.users.get_by_id(data.user_id) is None:
        raise NotFoundError("User not found")

    notification = await uow.notifications_w.add(notification)
    await uow.commit()
    logger.debug(
        "Notification %s (%s) created for user %d",
        notification.id, notification.type, notification.user_id,
    )
    return notification


async def list_notifications(
    user_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> list[Notification]:
    assert_self_or_admin(principal, user_id)
    return await uow.notifications.list_for_user(user_id)


async def mark_read(
    notification_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> Notification:
    notification = assert_notification_owner(
        principal, await uow.notifications.get_by_id(notification_id),
    )
    if notification.read:
        return notification

    await uow.notifications_w.mark_read(notification_id)
    await uow.commit()
    return await uow.notifications.get_by_id(notification_id)  # type: ignore[return-value]


async def mark_all_read(
    user_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> int:
    assert_self(principal, user_id)
    updated = await uow.notifications_w.mark_all_read(user_id)
    if updated:
        await uow.commit()
    return updated


async def unread_count(
    user_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> int:
    assert_self(principal, user_id)
    return await uow.notifications.count_unread(user_id)
