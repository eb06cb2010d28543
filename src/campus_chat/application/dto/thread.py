from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from campus_chat.domain.value_objects.user_ref import UserRef


@dataclass(frozen=True, slots=True)
class MessageView:
    id: UUID
    sender: UserRef
    content: str
    timestamp: datetime
    edited_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ThreadView:
    """A thread with its participants and full message history expanded."""

    id: UUID
    participants: list[UserRef]
    messages: list[MessageView] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
