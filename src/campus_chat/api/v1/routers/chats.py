from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Response, status

from campus_chat.api.deps import CurrentPrincipal, UoWDep
from campus_chat.api.v1.schemas.chat import (
    EditMessageRequest,
    MessageResponse,
    SendMessageRequest,
    ThreadResponse,
)
from campus_chat.services import message_service, thread_service

router = APIRouter(prefix="/api/v1", tags=["chats"])


@router.get("/chats", response_model=list[ThreadResponse])
async def list_threads(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[ThreadResponse]:
    threads = await thread_service.list_threads(principal, uow)
    return [ThreadResponse.model_validate(t, from_attributes=True) for t in threads]


@router.get("/chat/{user_id}", response_model=ThreadResponse)
async def get_or_create_thread(
    user_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ThreadResponse:
    thread = await thread_service.get_or_create_thread(user_id, principal, uow)
    return ThreadResponse.model_validate(thread, from_attributes=True)


@router.get("/chat/{chat_id}/messages", response_model=ThreadResponse)
async def get_messages(
    chat_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ThreadResponse:
    thread = await thread_service.get_messages(chat_id, principal, uow)
    return ThreadResponse.model_validate(thread, from_attributes=True)


@router.post("/chat/{chat_id}/message", response_model=ThreadResponse)
async def send_message(
    chat_id: UUID,
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ThreadResponse:
    thread = await message_service.send_message(chat_id, principal, body.content, uow)
    return ThreadResponse.model_validate(thread, from_attributes=True)


@router.put("/chat/{chat_id}/message/{message_id}", response_model=MessageResponse)
async def edit_message(
    chat_id: UUID,
    message_id: UUID,
    body: EditMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.edit_message(
        chat_id, message_id, principal, body.content, uow,
    )
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.delete(
    "/chat/{chat_id}/message/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_message(
    chat_id: UUID,
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> Response:
    await message_service.delete_message(chat_id, message_id, principal, uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
