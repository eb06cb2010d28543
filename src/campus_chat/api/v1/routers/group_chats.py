from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Response, status

from campus_chat.api.deps import CurrentPrincipal, GroupHistoryLimit, UoWDep
from campus_chat.api.v1.schemas.group import (
    AddMembersRequest,
    CreateGroupRequest,
    GroupMessageResponse,
    GroupResponse,
    PostGroupMessageRequest,
)
from campus_chat.api.v1.schemas.user import UserRefResponse
from campus_chat.application.dto.group import CreateGroupDTO
from campus_chat.services import group_service

router = APIRouter(prefix="/api/v1/group-chats", tags=["group-chats"])


@router.get("", response_model=list[GroupResponse])
async def list_groups(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[GroupResponse]:
    groups = await group_service.list_groups(principal, uow)
    return [GroupResponse.model_validate(g, from_attributes=True) for g in groups]


@router.post("", response_model=GroupResponse, status_code=201)
async def create_group(
    body: CreateGroupRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> GroupResponse:
    group = await group_service.create_group(
        CreateGroupDTO(
            name=body.name,
            type=body.type,
            description=body.description,
            club_id=body.club_id,
            members=tuple(body.members),
        ),
        principal,
        uow,
    )
    return GroupResponse.model_validate(group, from_attributes=True)


@router.get("/{group_id}/messages", response_model=list[GroupMessageResponse])
async def list_group_messages(
    group_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    limit: GroupHistoryLimit,
) -> list[GroupMessageResponse]:
    messages = await group_service.list_group_messages(group_id, principal, limit, uow)
    return [GroupMessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("/{group_id}/messages", response_model=GroupMessageResponse, status_code=201)
async def post_group_message(
    group_id: UUID,
    body: PostGroupMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> GroupMessageResponse:
    msg = await group_service.post_group_message(group_id, principal, body.message, uow)
    return GroupMessageResponse.model_validate(msg, from_attributes=True)


@router.get("/{group_id}/members", response_model=list[UserRefResponse])
async def list_members(
    group_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[UserRefResponse]:
    members = await group_service.list_members(group_id, principal, uow)
    return [UserRefResponse.model_validate(m, from_attributes=True) for m in members]


@router.post("/{group_id}/members", response_model=GroupResponse)
async def add_members(
    group_id: UUID,
    body: AddMembersRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> GroupResponse:
    group = await group_service.add_members(group_id, body.members, principal, uow)
    return GroupResponse.model_validate(group, from_attributes=True)


@router.delete("/{group_id}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    group_id: UUID,
    member_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> Response:
    await group_service.remove_member(group_id, member_id, principal, uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
