"""Settings shared by every environment."""
from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class LendingSettings(BaseSettings):
    """
    Application-level switches common to all modes.

    BRANCH_TRACKING: borrower branch is a required field on new loans.
    READ_FAILURE_POLICY: "raise" reports a failed collection read as an error,
        "empty" logs it and treats the collection as empty.
    VALIDATE_CATALOG_NAMES: reject asset/borrow writes that name a brand,
        department, etc. missing from its option catalog.
    """
    SECRET_KEY: str | None = None
    LOG_LEVEL: str = "INFO"

    BRANCH_TRACKING: bool = True
    READ_FAILURE_POLICY: Literal["raise", "empty"] = "raise"
    VALIDATE_CATALOG_NAMES: bool = False

    # Create tables from the ORM models at startup instead of via Alembic
    CREATE_TABLES_ON_STARTUP: bool = False

    # Session lifetime for staff sign-in
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12  # one shift
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
