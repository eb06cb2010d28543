from __future__ import annotations

from campus_chat.domain.entities.thread import Thread
from campus_chat.infrastructure.db.models.thread import ThreadModel


def model_to_entity(model: ThreadModel) -> Thread:
    return Thread(
        id=model.id,
        user_low=model.user_low,
        user_high=model.user_high,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_model(entity: Thread) -> ThreadModel:
    return ThreadModel(
        id=entity.id,
        user_low=entity.user_low,
        user_high=entity.user_high,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
