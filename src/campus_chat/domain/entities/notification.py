from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Notification:
    id: UUID
    user_id: int
    type: str
    content: str
    related_id: str | None
    read: bool
    created_at: datetime
