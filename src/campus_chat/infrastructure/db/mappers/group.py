from __future__ import annotations

from campus_chat.domain.entities.group_chat import GroupChat
from campus_chat.domain.entities.group_message import GroupMessage
from campus_chat.infrastructure.db.models.group_chat import GroupChatModel
from campus_chat.infrastructure.db.models.group_message import GroupMessageModel


def model_to_entity(model: GroupChatModel) -> GroupChat:
    return GroupChat(
        id=model.id,
        name=model.name,
        description=model.description or "",
        type=model.type,
        club_id=model.club_id,
        created_by=model.created_by,
        created_at=model.created_at,
    )


def entity_to_model(entity: GroupChat) -> GroupChatModel:
    return GroupChatModel(
        id=entity.id,
        name=entity.name,
        description=entity.description,
        type=entity.type,
        club_id=entity.club_id,
        created_by=entity.created_by,
        created_at=entity.created_at,
    )


def message_model_to_entity(model: GroupMessageModel) -> GroupMessage:
    return GroupMessage(
        id=model.id,
        group_id=model.group_id,
        sender_id=model.sender_id,
        content=model.content,
        created_at=model.created_at,
    )


def message_entity_to_model(entity: GroupMessage) -> GroupMessageModel:
    return GroupMessageModel(
        id=entity.id,
        group_id=entity.group_id,
        sender_id=entity.sender_id,
        content=entity.content,
        created_at=entity.created_at,
    )
