from __future__ import annotations

from pathlib import Path
from pydantic_settings import SettingsConfigDict

from config.base import LendingSettings

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.production"


class ProdSettings(LendingSettings):
    # No defaults: production must provide both
    DATABASE_URL: str
    SECRET_KEY: str

    APP_ENV: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
