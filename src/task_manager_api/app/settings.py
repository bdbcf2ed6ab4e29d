"""Application settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import MAX_RECORDS

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "task-manager-api"
    max_records: int = Field(default=MAX_RECORDS, ge=1)
    # Header carrying the already-authenticated caller identifier.
    user_header: str = "x-user-id"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TASK_MANAGER_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
