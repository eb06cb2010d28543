from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from campus_chat.domain.value_objects.user_ref import UserRef


@dataclass(frozen=True, slots=True)
class CreateGroupDTO:
    name: str
    type: str
    description: str = ""
    club_id: int | None = None
    members: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class GroupView:
    id: UUID
    name: str
    description: str
    type: str
    club_id: int | None
    created_by: UserRef | None
    members: list[int]
    created_at: datetime


@dataclass(frozen=True, slots=True)
class GroupMessageView:
    id: UUID
    group_id: UUID
    sender: UserRef
    content: str
    timestamp: datetime
