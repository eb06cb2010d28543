from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from campus_chat.api.v1.schemas.user import UserRefResponse


class SendMessageRequest(BaseModel):
    content: str


class EditMessageRequest(BaseModel):
    content: str


class MessageResponse(BaseModel):
    id: UUID
    sender: UserRefResponse
    content: str
    timestamp: datetime
    edited_at: datetime | None = None

    model_config = {"from_attributes": True}


class ThreadResponse(BaseModel):
    id: UUID
    participants: list[UserRefResponse]
    messages: list[MessageResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
