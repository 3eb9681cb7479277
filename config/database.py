"""Database utilities for constructing connection URLs dynamically"""
from urllib.parse import quote_plus


def get_database_url(
    driver: str,
    host: str | None,
    port: int,
    user: str | None,
    password: str | None,
    name: str | None,
) -> str:
    """
    Construct database URL from components.

    The password is URL-quoted so characters like '@' or '/' survive.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "lend", "p@ss", "equipment")
        'postgresql+asyncpg://lend:p%40ss@db:5432/equipment'
    """
    if not (host and user and name):
        raise ValueError("DB_HOST, DB_USER and DB_NAME must be set to build DATABASE_URL")
    secret = quote_plus(password) if password else ""
    return f"{driver}://{user}:{secret}@{host}:{port}/{name}"
