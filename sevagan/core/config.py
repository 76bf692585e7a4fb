# sevagan/core/config.py
from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # "production" hides the dev OTP code from API responses
    ENVIRONMENT: str = "development"

    # All resource routes live under this prefix (the web client calls /api/...)
    API_PREFIX: str = "/api"

    # OTP lifetime and reuse
    OTP_TTL_SECONDS: int = 300
    OTP_SINGLE_USE: bool = True

    # Dev-only session tokens look like "<TOKEN_PREFIX>-<account id>"
    TOKEN_PREFIX: str = "dev-token"

    # Signup profiles are appended here; empty string disables the export
    PROFILE_EXPORT_PATH: str = "signups.csv"

    # Live feed (server-sent events)
    STREAM_KEEPALIVE_SECONDS: float = 15.0
    STREAM_QUEUE_SIZE: int = 100

    CORS_ORIGINS: List[str] = ["*"]

    # environment variables win over .env entries
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
