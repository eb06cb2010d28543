"""Retention worker: periodically deletes direct messages past their lifetime."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from campus_chat.config import settings
from campus_chat.infrastructure.db.session import AsyncSessionLocal
from campus_chat.infrastructure.db.uow import SqlAlchemyUoW
from campus_chat.services import message_service

logger = logging.getLogger(__name__)


def retention_cutoff(now: datetime, hours: int) -> datetime | None:
    if hours <= 0:
        return None
    return now - timedelta(hours=hours)


async def _sweep() -> int:
    cutoff = retention_cutoff(datetime.now(timezone.utc), settings.CHAT_MESSAGE_RETENTION_HOURS)
    if cutoff is None:
        return 0
    async with AsyncSessionLocal() as session:
        return await message_service.purge_expired_messages(cutoff, SqlAlchemyUoW(session))


async def run_retention_worker() -> None:
    if settings.CHAT_MESSAGE_RETENTION_HOURS <= 0:
        logger.info("Message retention disabled, worker exiting")
        return

    logger.info(
        "Retention worker started (retention=%dh, sweep=%.0fs)",
        settings.CHAT_MESSAGE_RETENTION_HOURS,
        settings.RETENTION_SWEEP_SECONDS,
    )
    while True:
        try:
            await _sweep()
        except Exception:
            logger.exception("Retention worker loop error")
        await asyncio.sleep(settings.RETENTION_SWEEP_SECONDS)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(run_retention_worker())


if __name__ == "__main__":
    main()
