from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_DISPLAY_NAME = "Unknown"


@dataclass(frozen=True, slots=True)
class UserRef:
    """The single shape in which a user leaves the service boundary."""

    id: int
    display_name: str

    @classmethod
    def unknown(cls, user_id: int) -> UserRef:
        return cls(id=user_id, display_name=UNKNOWN_DISPLAY_NAME)
