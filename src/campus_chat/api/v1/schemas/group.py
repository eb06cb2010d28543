from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from campus_chat.api.v1.schemas.user import UserRefResponse


class CreateGroupRequest(BaseModel):
    name: str
    description: str = ""
    type: str
    club_id: int | None = None
    members: list[int] = Field(default_factory=list)


class AddMembersRequest(BaseModel):
    members: list[int]


class PostGroupMessageRequest(BaseModel):
    message: str


class GroupResponse(BaseModel):
    id: UUID
    name: str
    description: str
    type: str
    club_id: int | None
    created_by: UserRefResponse | None
    members: list[int]
    created_at: datetime

    model_config = {"from_attributes": True}


class GroupMessageResponse(BaseModel):
    id: UUID
    group_id: UUID
    sender: UserRefResponse
    content: str
    timestamp: datetime

    model_config = {"from_attributes": True}
