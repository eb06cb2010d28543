from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class GroupMessage:
    id: UUID
    group_id: UUID
    sender_id: int
    content: str
    created_at: datetime
