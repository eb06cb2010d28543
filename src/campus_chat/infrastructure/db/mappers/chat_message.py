from __future__ import annotations

from campus_chat.domain.entities.chat_message import ChatMessage
from campus_chat.infrastructure.db.models.chat_message import ChatMessageModel


def model_to_entity(model: ChatMessageModel) -> ChatMessage:
    return ChatMessage(
        id=model.id,
        thread_id=model.thread_id,
        sender_id=model.sender_id,
        content=model.content,
        created_at=model.created_at,
        edited_at=model.edited_at,
    )


def entity_to_model(entity: ChatMessage) -> ChatMessageModel:
    return ChatMessageModel(
        id=entity.id,
        thread_id=entity.thread_id,
        sender_id=entity.sender_id,
        content=entity.content,
        created_at=entity.created_at,
        edited_at=entity.edited_at,
    )
