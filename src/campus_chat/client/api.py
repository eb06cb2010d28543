"""Async HTTP client for the campus chat REST API."""
from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Self

import httpx

from campus_chat.client.config import ClientSettings
from campus_chat.client.errors import UnavailableError, error_for_status
from campus_chat.client.models import Group, GroupMessage, Message, Notification, Thread, UserRef
from campus_chat.client.session import ClientSession

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if detail is not None:
            return detail if isinstance(detail, str) else str(detail)
    return response.reason_phrase


class CampusApiClient:
    """Thin wrapper over the REST surface, bound to one ClientSession.

    HTTP failures are raised as ``ApiError`` subclasses; transport failures
    become ``UnavailableError``.
    """

    def __init__(
        self,
        session: ClientSession,
        settings: ClientSettings | None = None,
        *,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.session = session
        self._settings = settings or ClientSettings()
        self._http = httpx.AsyncClient(
            base_url=(base_url or self._settings.BASE_URL).rstrip("/") + API_PREFIX,
            headers={"Authorization": f"Bearer {session.token}"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.debug("%s %s failed: %s", method, path, exc)
            raise UnavailableError(f"Could not reach the chat server: {exc}") from exc

        if response.is_error:
            raise error_for_status(response.status_code, _detail(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Direct chats

    async def get_or_create_thread(self, user_id: int) -> Thread:
        return Thread.model_validate(await self._request("GET", f"/chat/{user_id}"))

    async def list_threads(self) -> list[Thread]:
        data = await self._request("GET", "/chats")
        return [Thread.model_validate(t) for t in data]

    async def get_messages(self, thread_id: str) -> Thread:
        return Thread.model_validate(await self._request("GET", f"/chat/{thread_id}/messages"))

    async def send_message(self, thread_id: str, content: str) -> Thread:
        data = await self._request("POST", f"/chat/{thread_id}/message", json={"content": content})
        return Thread.model_validate(data)

    async def edit_message(self, thread_id: str, message_id: str, content: str) -> Message:
        data = await self._request(
            "PUT", f"/chat/{thread_id}/message/{message_id}", json={"content": content},
        )
        return Message.model_validate(data)

    async def delete_message(self, thread_id: str, message_id: str) -> None:
        await self._request("DELETE", f"/chat/{thread_id}/message/{message_id}")

    # Group chats

    async def list_groups(self) -> list[Group]:
        data = await self._request("GET", "/group-chats")
        return [Group.model_validate(g) for g in data]

    async def create_group(
        self,
        name: str,
        type: str,
        *,
        description: str = "",
        club_id: int | None = None,
        members: list[int] | None = None,
    ) -> Group:
        payload = {
            "name": name,
            "type": type,
            "description": description,
            "club_id": club_id,
            "members": members or [],
        }
        return Group.model_validate(await self._request("POST", "/group-chats", json=payload))

    async def list_group_messages(self, group_id: str) -> list[GroupMessage]:
        data = await self._request("GET", f"/group-chats/{group_id}/messages")
        return [GroupMessage.model_validate(m) for m in data]

    async def post_group_message(self, group_id: str, message: str) -> GroupMessage:
        data = await self._request(
            "POST", f"/group-chats/{group_id}/messages", json={"message": message},
        )
        return GroupMessage.model_validate(data)

    async def add_members(self, group_id: str, members: list[int]) -> Group:
        data = await self._request(
            "POST", f"/group-chats/{group_id}/members", json={"members": members},
        )
        return Group.model_validate(data)

    async def remove_member(self, group_id: str, member_id: int) -> None:
        await self._request("DELETE", f"/group-chats/{group_id}/members/{member_id}")

    async def list_members(self, group_id: str) -> list[UserRef]:
        data = await self._request("GET", f"/group-chats/{group_id}/members")
        return [UserRef.model_validate(u) for u in data]

    # Notifications

    async def list_notifications(self) -> list[Notification]:
        data = await self._request("GET", f"/notifications/{self.session.user_id}")
        return [Notification.model_validate(n) for n in data]

    async def mark_read(self, notification_id: str) -> Notification:
        data = await self._request("PUT", f"/notifications/{notification_id}/read")
        return Notification.model_validate(data)

    async def mark_all_read(self) -> int:
        data = await self._request(
            "PUT", f"/notifications/user/{self.session.user_id}/read-all",
        )
        return int(data["updated"])

    async def unread_count(self) -> int:
        data = await self._request("GET", f"/notifications/{self.session.user_id}/unread-count")
        return int(data["count"])
