from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class CreateNotificationRequest(BaseModel):
    user_id: int
    type: str
    content: str
    related_id: str | None = None


class NotificationResponse(BaseModel):
    id: UUID
    user_id: int
    type: str
    content: str
    related_id: str | None
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MarkAllReadResponse(BaseModel):
    updated: int


class UnreadCountResponse(BaseModel):
    count: int
