from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ChatMessage:
    id: UUID
    thread_id: UUID
    sender_id: int
    content: str
    created_at: datetime
    edited_at: datetime | None = None
