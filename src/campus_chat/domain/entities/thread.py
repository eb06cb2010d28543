from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


def ordered_pair(a: int, b: int) -> tuple[int, int]:
    """Canonical storage order for an unordered pair of user ids."""
    return (a, b) if a < b else (b, a)


@dataclass(frozen=True, slots=True)
class Thread:
    id: UUID
    user_low: int
    user_high: int
    created_at: datetime
    updated_at: datetime

    @property
    def participant_ids(self) -> tuple[int, int]:
        return (self.user_low, self.user_high)

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user_low, self.user_high)

    def other_participant(self, user_id: int) -> int:
        return self.user_high if user_id == self.user_low else self.user_low
