from __future__ import annotations

from pathlib import Path
from pydantic_settings import SettingsConfigDict

from config.base import LendingSettings

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.test"


class TestSettings(LendingSettings):
    DATABASE_URL: str = f"sqlite+aiosqlite:///{ROOT / 'test.db'}"
    APP_ENV: str = "test"
    SECRET_KEY: str | None = "test-secret-key"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
