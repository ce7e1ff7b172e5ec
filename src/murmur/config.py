# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str = "sqlite+aiosqlite:///./murmur.db"
    environment: str = "production"
    log_level: str = "info"
    database_pool_size: int = 20

    # Content
    max_content_length: int = 100_000
    mention_link_target: str = "_blank"

    # Blocking
    # When False an unknown user id is treated as "not blocked". When True the
    # lookup raises NotFoundError instead.
    strict_block_lookup: bool = False

    # Reports
    # Users who receive a notification for every filed report, in addition to
    # the filer. Example: '["mod-1","mod-2"]'
    report_moderator_ids: list[str] = []

    model_config = {"env_file": ".env", "env_prefix": "MURMUR_"}

    @model_validator(mode="after")
    def _validate_link_target(self) -> "Settings":
        if not self.mention_link_target.strip():
            raise ValueError("mention_link_target must not be blank")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Lazy-loaded to avoid import-time failures."""
    return Settings()
