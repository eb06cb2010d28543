from __future__ import annotations

from dataclasses import dataclass

from campus_chat.domain.value_objects.user_ref import UNKNOWN_DISPLAY_NAME, UserRef


@dataclass(frozen=True, slots=True)
class User:
    id: int
    username: str
    name: str | None
    email: str
    role: str

    @property
    def display_name(self) -> str:
        return self.name or self.username or UNKNOWN_DISPLAY_NAME

    def to_ref(self) -> UserRef:
        return UserRef(id=self.id, display_name=self.display_name)
