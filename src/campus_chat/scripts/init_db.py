"""Create the schema and the world chat."""
from __future__ import annotations

import asyncio
import logging

from campus_chat.infrastructure.db import models  # noqa: F401
from campus_chat.infrastructure.db.base import Base
from campus_chat.infrastructure.db.session import AsyncSessionLocal, dispose_engine, engine
from campus_chat.infrastructure.db.uow import SqlAlchemyUoW
from campus_chat.services import group_service

logger = logging.getLogger(__name__)


async def init_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema created (%d tables)", len(Base.metadata.tables))

    async with AsyncSessionLocal() as session:
        await group_service.ensure_world_group(SqlAlchemyUoW(session))

    await dispose_engine()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())


if __name__ == "__main__":
    main()
