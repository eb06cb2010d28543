from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from campus_chat.domain.value_objects.enums import GroupType


@dataclass(frozen=True, slots=True)
class GroupChat:
    id: UUID
    name: str
    description: str
    type: str
    club_id: int | None
    created_by: int | None
    created_at: datetime

    @property
    def is_world(self) -> bool:
        return self.type == GroupType.WORLD

    def is_creator(self, user_id: int) -> bool:
        return self.created_by is not None and self.created_by == user_id
