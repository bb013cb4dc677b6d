from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    API_BASE_URL: Optional[str] = Field(default=None)
    API_TOKEN: Optional[str] = Field(default=None)
    API_TIMEOUT_SECONDS: float = Field(default=30.0)

    DEFAULT_PAGE_LIMIT: int = Field(default=10, ge=1)
    SEARCH_DEBOUNCE_SECONDS: float = Field(default=0.5, ge=0)

    COMPARISON_TOLERANCE_DAYS: int = Field(default=3, ge=0)


settings = Settings()
