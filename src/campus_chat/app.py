from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from campus_chat.api.middleware.correlation_id import CorrelationIdMiddleware
from campus_chat.api.middleware.metrics import RequestTimingMiddleware
from campus_chat.api.v1.routers import chats, group_chats, health, notifications
from campus_chat.application.exceptions import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)
from campus_chat.config import settings
from campus_chat.infrastructure.db.session import AsyncSessionLocal, dispose_engine
from campus_chat.infrastructure.db.uow import SqlAlchemyUoW
from campus_chat.services import group_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    try:
        async with AsyncSessionLocal() as session:
            world = await group_service.ensure_world_group(SqlAlchemyUoW(session))
        logger.info("World chat ready: %s", world.id)
    except DBAPIError:
        logger.exception("Could not ensure world chat at startup; /readyz will report the database")

    yield

    await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Campus Chat Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(chats.router)
    app.include_router(group_chats.router)
    app.include_router(notifications.router)

    return app


_STATUS_BY_ERROR: dict[type[AppError], int] = {
    NotFoundError: 404,
    ForbiddenError: 403,
    ConflictError: 409,
    ValidationError: 422,
    UnavailableError: 503,
}


async def _app_error(_req: Request, exc: Exception) -> JSONResponse:
    detail = exc.detail if isinstance(exc, AppError) else str(exc)
    return JSONResponse(
        status_code=_STATUS_BY_ERROR.get(type(exc), 500),
        content={"detail": detail},
    )


async def _db_error(req: Request, exc: Exception) -> JSONResponse:
    logger.error("Database error on %s %s: %s", req.method, req.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


def _register_exception_handlers(app: FastAPI) -> None:
    for error_cls in _STATUS_BY_ERROR:
        app.add_exception_handler(error_cls, _app_error)
    app.add_exception_handler(DBAPIError, _db_error)
