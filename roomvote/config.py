"""
Room Vote – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── App ──
    APP_NAME: str = "Room Vote"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Database ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./roomvote.db"

    # ── Voting ──
    # "address": one vote per network address (survives lost sessions,
    #            but everyone behind one NAT shares a vote).
    # "session": one vote per client session token (precise, but a client
    #            can mint new tokens at will).
    VOTER_IDENTITY: Literal["address", "session"] = "address"
    DEFAULT_VOTER_NAME: str = "Anonymous"

    # ── Rooms & suggestions ──
    ROOM_CODE_LENGTH: int = 6
    DEFAULT_ROOM_CREATOR: str = "anonymous"
    SUGGESTION_NAME_MAX_LENGTH: int = 50

    # ── Clients ──
    POLL_INTERVAL_SECONDS: int = 10


settings = Settings()
