from __future__ import annotations

from campus_chat.domain.entities.user import User
from campus_chat.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        username=model.username,
        name=model.name,
        email=model.email,
        role=model.role,
    )
