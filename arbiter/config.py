"""Runtime configuration.

Settings come from ``ARBITER_*`` environment variables or a ``.env.arbiter``
file next to the working directory. Nothing here changes the rules of chess;
only logging, the HTTP surface and perft limits are tunable.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ARBITER_",
        env_file=".env.arbiter",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    api_title: str = "Chess Arbiter API"
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    max_perft_depth: int = Field(default=5, ge=1, le=8)


@lru_cache
def get_settings() -> Settings:
    return Settings()
