import logging

from config import settings
from core import security


def test_missing_secret_key_warns_once(monkeypatch, caplog):
    monkeypatch.setattr(settings, "SECRET_KEY", None)
    monkeypatch.setattr(security, "_warned_dev_secret", False)

    with caplog.at_level(logging.WARNING, logger="core.security"):
        token = security.create_access_token({"sub": "1"})
        assert security.decode_token(token)["sub"] == "1"
        security.create_refresh_token({"sub": "1"})

    warnings = [r for r in caplog.records if "SECRET_KEY is not set" in r.getMessage()]
    assert len(warnings) == 1


def test_configured_secret_key_is_used(monkeypatch):
    monkeypatch.setattr(settings, "SECRET_KEY", "stage-key")
    assert security.get_secret_key() == "stage-key"
