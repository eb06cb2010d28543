from __future__ import annotations

from campus_chat.domain.entities.notification import Notification
from campus_chat.infrastructure.db.models.notification import NotificationModel


def model_to_entity(model: NotificationModel) -> Notification:
    return Notification(
        id=model.id,
        user_id=model.user_id,
        type=model.type,
        content=model.content,
        related_id=model.related_id,
        read=model.read,
        created_at=model.created_at,
    )


def entity_to_model(entity: Notification) -> NotificationModel:
    return NotificationModel(
        id=entity.id,
        user_id=entity.user_id,
        type=entity.type,
        content=entity.content,
        related_id=entity.related_id,
        read=entity.read,
        created_at=entity.created_at,
    )
