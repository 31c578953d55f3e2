"""
config/settings.py
──────────────────
Centralised settings loaded from .env via pydantic-settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"

    # Data
    data_dir: Path = Path("./data")
    profiles_file: str = "profiles.json"

    # Pagination
    default_page_size: int = Field(10, ge=1)
    max_page_size: int = Field(100, ge=1)

    # Front end
    api_url: str = "http://localhost:8000"

    # Logging
    log_level: str = "INFO"
    log_file: Path = Path("./logs/app.log")

    @property
    def profiles_path(self) -> Path:
        return self.data_dir / self.profiles_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
