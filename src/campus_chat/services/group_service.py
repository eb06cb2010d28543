from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from campus_chat.application.dto.group import CreateGroupDTO, GroupMessageView, GroupView
from campus_chat.application.dto.principal import Principal
from campus_chat.application.exceptions import ForbiddenError, NotFoundError, ValidationError
from campus_chat.application.policies.permissions import (
    assert_group_access,
    assert_group_owner,
)
from campus_chat.application.uow import UnitOfWork
from campus_chat.domain.entities.group_chat import GroupChat
from campus_chat.domain.entities.group_message import GroupMessage
from campus_chat.domain.entities.user import User
from campus_chat.domain.value_objects.enums import GroupType
from campus_chat.domain.value_objects.user_ref import UserRef

logger = logging.getLogger(__name__)

WORLD_GROUP_NAME = "World Chat"
WORLD_GROUP_DESCRIPTION = "Public chat for everyone in the campus"


def _ref(users: dict[int, User], user_id: int) -> UserRef:
    user = users.get(user_id)
    return user.to_ref() if user is not None else UserRef.unknown(user_id)


async def _group_view(group: GroupChat, uow: UnitOfWork) -> GroupView:
    member_ids = [] if group.is_world else await uow.group_members.list_member_ids(group.id)
    creator: UserRef | None = None
    if group.created_by is not None:
        users = await uow.users.get_many([group.created_by])
        creator = _ref(users, group.created_by)
    return GroupView(
        id=group.id,
        name=group.name,
        description=group.description,
        type=group.type,
        club_id=group.club_id,
        created_by=creator,
        members=member_ids,
        created_at=group.created_at,
    )


async def _require_users(user_ids: set[int], uow: UnitOfWork) -> None:
    found = await uow.users.get_many(user_ids)
    missing = sorted(user_ids - found.keys())
    if missing:
        raise NotFoundError(f"Users not found: {', '.join(map(str, missing))}")


async def ensure_world_group(uow: UnitOfWork) -> GroupChat:
    """Create the single world channel if it does not exist yet."""
    existing = await uow.groups.get_world()
    if existing is not None:
        return existing

    group = await uow.groups_w.create(
        GroupChat(
            id=uuid.uuid4(),
            name=WORLD_GROUP_NAME,
            description=WORLD_GROUP_DESCRIPTION,
            type=GroupType.WORLD,
            club_id=None,
            created_by=None,
            created_at=datetime.now(timezone.utc),
        )
    )
    await uow.commit()
    logger.info("World chat %s created", group.id)
    return group


async def list_groups(principal: Principal, uow: UnitOfWork) -> list[GroupView]:
    groups = await uow.groups.list_for_user(principal.user_id)
    return [await _group_view(g, uow) for g in groups]


async def create_group(
    data: CreateGroupDTO,
    principal: Principal,
    uow: UnitOfWork,
) -> GroupView:
    name = (data.name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    if data.type not in (GroupType.CUSTOM, GroupType.CLUB):
        raise ValidationError('Invalid group type. Use "custom" or "club"')
    if data.type == GroupType.CLUB and data.club_id is None:
        raise ValidationError("Club ID is required for club groups")

    group_type = GroupType(data.type)
    invited = set(data.members) - {principal.user_id}
    if invited:
        await _require_users(invited, uow)

    now = datetime.now(timezone.utc)
    group = await uow.groups_w.create(
        GroupChat(
            id=uuid.uuid4(),
            name=name,
            description=data.description or "",
            type=group_type,
            club_id=data.club_id if group_type == GroupType.CLUB else None,
            created_by=principal.user_id,
            created_at=now,
        )
    )
    await uow.group_members_w.add_many(
        group.id, [principal.user_id, *sorted(invited)], now,
    )
    await uow.commit()
    logger.info(
        "Group %s (%s) created by user %d with %d members",
        group.id, group.type, principal.user_id, len(invited) + 1,
    )
    return await _group_view(group, uow)


async def post_group_message(
    group_id: uuid.UUID,
    principal: Principal,
    content: str,
    uow: UnitOfWork,
) -> GroupMessageView:
    group = await assert_group_access(
        principal, await uow.groups.get_by_id(group_id), uow.group_members,
    )
    text = (content or "").strip()
    if not text:
        raise ValidationError("Message is required")

    msg = await uow.group_messages_w.add(
        GroupMessage(
            id=uuid.uuid4(),
            group_id=group.id,
            sender_id=principal.user_id,
            content=text,
            created_at=datetime.now(timezone.utc),
        )
    )
    await uow.commit()

    users = await uow.users.get_many([msg.sender_id])
    return GroupMessageView(
        id=msg.id,
        group_id=msg.group_id,
        sender=_ref(users, msg.sender_id),
        content=msg.content,
        timestamp=msg.created_at,
    )


async def list_group_messages(
    group_id: uuid.UUID,
    principal: Principal,
    limit: int,
    uow: UnitOfWork,
) -> list[GroupMessageView]:
    group = await assert_group_access(
        principal, await uow.groups.get_by_id(group_id), uow.group_members,
    )
    messages = await uow.group_messages.list_recent(group.id, limit=limit)
    users = await uow.users.get_many({m.sender_id for m in messages})
    return [
        GroupMessageView(
            id=m.id,
            group_id=m.group_id,
            sender=_ref(users, m.sender_id),
            content=m.content,
            timestamp=m.created_at,
        )
        for m in messages
    ]


async def add_members(
    group_id: uuid.UUID,
    user_ids: list[int],
    principal: Principal,
    uow: UnitOfWork,
) -> GroupView:
    group = assert_group_owner(principal, await uow.groups.get_by_id(group_id))
    if not user_ids:
        raise ValidationError("Members array is required")

    current = set(await uow.group_members.list_member_ids(group.id))
    new_ids = set(user_ids) - current
    if new_ids:
        await _require_users(new_ids, uow)
        await uow.group_members_w.add_many(
            group.id, sorted(new_ids), datetime.now(timezone.utc),
        )
        await uow.commit()
    return await _group_view(group, uow)


async def remove_member(
    group_id: uuid.UUID,
    member_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> None:
    group = assert_group_owner(principal, await uow.groups.get_by_id(group_id))
    if group.is_creator(member_id):
        raise ForbiddenError("Cannot remove group creator")

    removed = await uow.group_members_w.remove(group.id, member_id)
    if not removed:
        raise NotFoundError("Member not found")
    await uow.commit()


async def list_members(
    group_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> list[UserRef]:
    """Members including the creator. The world group has no explicit members."""
    group = await assert_group_access(
        principal, await uow.groups.get_by_id(group_id), uow.group_members,
    )
    if group.is_world:
        return []

    member_ids = await uow.group_members.list_member_ids(group.id)
    if group.created_by is not None and group.created_by not in member_ids:
        member_ids.append(group.created_by)
    users = await uow.users.get_many(member_ids)
    return [_ref(users, uid) for uid in member_ids]
