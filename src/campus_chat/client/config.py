from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Poller settings, read from ``CAMPUS_CLIENT_*`` environment variables."""

    BASE_URL: str = "http://localhost:8000"

    CHAT_POLL_SECONDS: float = 3.0
    THREAD_LIST_POLL_SECONDS: float = 5.0
    NOTIFICATION_POLL_SECONDS: float = 30.0
    UNREAD_COUNT_POLL_SECONDS: float = 60.0

    model_config = SettingsConfigDict(
        env_prefix="CAMPUS_CLIENT_",
        env_file=".env",
        extra="ignore",
    )
