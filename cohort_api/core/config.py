"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.

MONGODB_URI and JWT_SECRET have no defaults: the app refuses to start
without them.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = Field(..., min_length=1)
    mongodb_db: str = "cohort_tracker"
    # How long a request waits for an unreachable server before failing
    mongodb_timeout_ms: int = 5000

    # JWT Auth
    jwt_secret: str = Field(..., min_length=1)
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Password hashing cost
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # App
    cors_origins: List[str] = ["http://localhost:5173"]
    port: int = 5005
    log_level: str = "INFO"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
