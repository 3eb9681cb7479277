"""
Settings for the lending API.

MODE (or APP_ENV) picks one settings class; each class reads its own
env/.env.<mode> file when present. Unknown modes fall back to local.
"""
from __future__ import annotations

import os

from .base import LendingSettings
from .local import LocalSettings
from .stage import StageSettings
from .prod import ProdSettings
from .test import TestSettings

MODE = (os.environ.get("MODE") or os.environ.get("APP_ENV") or "local").lower()

_MAPPING: dict[str, type[LendingSettings]] = {
    "local": LocalSettings,
    "dev": LocalSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
    "test": TestSettings,
}


def _choose_settings_class(mode: str) -> type[LendingSettings]:
    return _MAPPING.get(mode, LocalSettings)


SettingsClass = _choose_settings_class(MODE)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "MODE", "LendingSettings"]
