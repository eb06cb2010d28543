from __future__ import annotations

from dataclasses import dataclass

from campus_chat.domain.value_objects.enums import UserRole


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity extracted from JWT.

    Passed explicitly into every service call; nothing reads the current
    user from ambient state.
    """

    user_id: int
    role: UserRole = UserRole.STUDENT
    display_name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
