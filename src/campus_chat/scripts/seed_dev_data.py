"""Seed development data: campus users, the world chat and a sample thread."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy.dialects.postgresql import insert as pg_insert

from campus_chat.application.dto.principal import Principal
from campus_chat.domain.value_objects.enums import UserRole
from campus_chat.infrastructure.db.models.user import UserModel
from campus_chat.infrastructure.db.session import AsyncSessionLocal
from campus_chat.infrastructure.db.uow import SqlAlchemyUoW
from campus_chat.services import group_service, message_service, thread_service

logger = logging.getLogger(__name__)

USERS = [
    (1, "admin", "Campus Admin", "admin@campus.test", UserRole.ADMIN),
    (2, "asha", "Asha Rao", "asha@campus.test", UserRole.STUDENT),
    (3, "vikram", "Vikram Iyer", "vikram@campus.test", UserRole.STUDENT),
    (4, "prof.menon", "Lakshmi Menon", "menon@campus.test", UserRole.TEACHER),
]


async def seed() -> None:
    async with AsyncSessionLocal() as session:
        now = datetime.now(timezone.utc)
        stmt = pg_insert(UserModel).values(
            [
                {
                    "id": uid,
                    "username": username,
                    "name": name,
                    "email": email,
                    "role": role,
                    "created_at": now,
                }
                for uid, username, name, email, role in USERS
            ]
        ).on_conflict_do_nothing()
        await session.execute(stmt)
        await session.commit()

        uow = SqlAlchemyUoW(session)
        await group_service.ensure_world_group(uow)

        asha = Principal(user_id=2, display_name="Asha Rao")
        vikram = Principal(user_id=3, display_name="Vikram Iyer")
        thread = await thread_service.get_or_create_thread(vikram.user_id, asha, uow)
        await message_service.send_message(thread.id, asha, "Are you coming to the lab today?", uow)
        await message_service.send_message(thread.id, vikram, "Yes, after the 2pm lecture", uow)

        logger.info("Seeded %d users and thread %s", len(USERS), thread.id)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
