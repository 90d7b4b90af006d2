from typing import Literal
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App env
    app_env: Literal["dev", "prod", "test"] = "dev"

    # PBKDF2 iteration policy
    pbkdf2_hash_count: int = 25000
    pbkdf2_min_hash_count: int = 1000
    pbkdf2_max_hash_count: int = 10000000

    # Salt size in raw bytes (encoded length is derived)
    pbkdf2_salt_length: int = 16

    # Logging
    log_level: str = "WARNING"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
