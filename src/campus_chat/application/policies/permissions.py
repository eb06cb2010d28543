from __future__ import annotations

from campus_chat.application.dto.principal import Principal
from campus_chat.application.exceptions import ForbiddenError, NotFoundError
from campus_chat.application.repositories.group import GroupMemberReader
from campus_chat.domain.entities.group_chat import GroupChat
from campus_chat.domain.entities.notification import Notification
from campus_chat.domain.entities.thread import Thread


def assert_thread_access(principal: Principal, thread: Thread | None) -> Thread:
    """Raise if the thread doesn't exist or the caller is not one of its two participants."""
    if thread is None:
        raise NotFoundError("Chat not found")
    if not thread.has_participant(principal.user_id):
        raise ForbiddenError("Not a participant of this chat")
    return thread


async def assert_group_access(
    principal: Principal,
    group: GroupChat | None,
    members: GroupMemberReader,
) -> GroupChat:
    """World chat is open to everyone; other groups to members and the creator."""
    if group is None:
        raise NotFoundError("Group not found")

    if group.is_world or group.is_creator(principal.user_id):
        return group

    if not await members.is_member(group.id, principal.user_id):
        raise ForbiddenError("Access denied")

    return group


def assert_group_owner(principal: Principal, group: GroupChat | None) -> GroupChat:
    if group is None:
        raise NotFoundError("Group not found")
    if group.is_world:
        raise ForbiddenError("World chat membership cannot be changed")
    if not group.is_creator(principal.user_id):
        raise ForbiddenError("Only the group creator can manage members")
    return group


def assert_self_or_admin(principal: Principal, user_id: int) -> None:
    if principal.user_id != user_id and not principal.is_admin:
        raise ForbiddenError("You can only access your own notifications")


def assert_self(principal: Principal, user_id: int) -> None:
    if principal.user_id != user_id:
        raise ForbiddenError("You can only access your own notifications")


def assert_notification_owner(
    principal: Principal, notification: Notification | None
) -> Notification:
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.user_id != principal.user_id:
        raise ForbiddenError("You can only mark your own notifications as read")
    return notification
