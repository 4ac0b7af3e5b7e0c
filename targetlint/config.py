"""Linter configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Linter settings loaded from environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Signature probing
    CODESIGN_PATH: str = "codesign"
    SIGNATURE_RETRY_ATTEMPTS: int = 3
    SIGNATURE_RETRY_MAX_WAIT_SECONDS: float = 4.0

    model_config = {"env_prefix": "TARGETLINT_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
