from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from campus_chat.api.deps import CurrentPrincipal, UoWDep
from campus_chat.api.v1.schemas.notification import (
    CreateNotificationRequest,
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from campus_chat.application.dto.notification import CreateNotificationDTO
from campus_chat.services import notification_service

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.post("", response_model=NotificationResponse, status_code=201)
async def create_notification(
    body: CreateNotificationRequest,
    _principal: CurrentPrincipal,
    uow: UoWDep,
) -> NotificationResponse:
    notification = await notification_service.create_notification(
        CreateNotificationDTO(
            user_id=body.user_id,
            type=body.type,
            content=body.content,
            related_id=body.related_id,
        ),
        uow,
    )
    return NotificationResponse.model_validate(notification, from_attributes=True)


@router.put("/user/{user_id}/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    user_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MarkAllReadResponse:
    updated = await notification_service.mark_all_read(user_id, principal, uow)
    return MarkAllReadResponse(updated=updated)


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> NotificationResponse:
    notification = await notification_service.mark_read(notification_id, principal, uow)
    return NotificationResponse.model_validate(notification, from_attributes=True)


@router.get("/{user_id}/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> UnreadCountResponse:
    count = await notification_service.unread_count(user_id, principal, uow)
    return UnreadCountResponse(count=count)


@router.get("/{user_id}", response_model=list[NotificationResponse])
async def list_notifications(
    user_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[NotificationResponse]:
    items = await notification_service.list_notifications(user_id, principal, uow)
    return [NotificationResponse.model_validate(n, from_attributes=True) for n in items]
