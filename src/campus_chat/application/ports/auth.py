from __future__ import annotations

from typing import Protocol

from campus_chat.application.dto.principal import Principal


class TokenVerifier(Protocol):
    """Turns a bearer token into the caller's Principal, raising on any invalid token."""

    async def verify(self, token: str) -> Principal: ...
