from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClientSession:
    """Who the client is acting as. Passed explicitly to the API client and views."""

    token: str
    user_id: int
    display_name: str = ""
