from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CreateNotificationDTO:
    user_id: int
    type: str
    content: str
    related_id: str | None = None
