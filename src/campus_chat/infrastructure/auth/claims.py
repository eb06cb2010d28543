from __future__ import annotations

from typing import Any

from campus_chat.application.dto.principal import Principal
from campus_chat.domain.value_objects.enums import UserRole


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from decoded token claims.

    ``sub`` carries the numeric user id. ``role`` falls back to student when
    absent or unknown, and ``name`` is used as the display name if present.
    """
    role_raw = payload.get("role", UserRole.STUDENT)
    role = UserRole(role_raw) if role_raw in UserRole.__members__.values() else UserRole.STUDENT
    return Principal(
        user_id=int(payload["sub"]),
        role=role,
        display_name=str(payload.get("name") or ""),
    )
