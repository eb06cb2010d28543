"""Client-side shapes of the campus chat API payloads."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, model_validator

UNKNOWN_DISPLAY_NAME = "Unknown"


class UserRef(BaseModel):
    """A user as the client sees it.

    Accepts a bare id, or an expanded object keyed by ``id`` or ``_id`` with
    the name under ``display_name``, ``name`` or ``username``.
    """

    id: int
    display_name: str = UNKNOWN_DISPLAY_NAME

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, bool):
            raise ValueError("Invalid user reference")
        if isinstance(data, (int, str)):
            return {"id": int(data), "display_name": UNKNOWN_DISPLAY_NAME}
        if isinstance(data, dict):
            user_id = data.get("id", data.get("_id"))
            name = (
                data.get("display_name")
                or data.get("name")
                or data.get("username")
                or UNKNOWN_DISPLAY_NAME
            )
            return {"id": user_id, "display_name": name}
        return data


class Message(BaseModel):
    id: str
    sender: UserRef
    content: str
    timestamp: datetime
    edited_at: datetime | None = None
    pending: bool = False

    @property
    def is_temporary(self) -> bool:
        return self.id.startswith("temp-")


class Thread(BaseModel):
    id: str
    participants: list[UserRef]
    messages: list[Message] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def other_participant(self, user_id: int) -> UserRef | None:
        for p in self.participants:
            if p.id != user_id:
                return p
        return None


class ThreadSummary(BaseModel):
    thread_id: str
    other_user: UserRef | None
    last_message: str | None
    last_message_time: datetime | None
    unread_count: int = 0


class Group(BaseModel):
    id: str
    name: str
    description: str = ""
    type: str
    club_id: int | None = None
    created_by: UserRef | None = None
    members: list[int] = []
    created_at: datetime


class GroupMessage(BaseModel):
    id: str
    group_id: str
    sender: UserRef
    content: str
    timestamp: datetime


class Notification(BaseModel):
    id: str
    user_id: int
    type: str
    content: str
    related_id: str | None = None
    read: bool = False
    created_at: datetime
