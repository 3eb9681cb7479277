# api/catalogs/db_manager.py
"""
Business logic for the option catalogs (brands, vendors, models,
departments, branches, locations).
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.store import commit_or_raise, fetch_all
from db_models.catalog import CATALOGS
from . import queries

logger = logging.getLogger(__name__)


class UnknownCatalogError(Exception):
    """Raised when the catalog name is not one of CATALOGS."""
    pass


class OptionNotFoundError(Exception):
    pass


class DuplicateOptionError(Exception):
    pass


class UnknownCatalogNameError(Exception):
    """Raised when a form value is missing from its catalog."""
    pass


def catalog_model(catalog: str):
    try:
        return CATALOGS[catalog]
    except KeyError:
        raise UnknownCatalogError(
            f"Unknown catalog '{catalog}'. Expected one of: {', '.join(CATALOGS)}"
        ) from None


async def list_options(db: AsyncSession, catalog: str) -> list:
    model = catalog_model(catalog)
    return await fetch_all(db, queries.select_options(model), what=catalog)


async def add_option(db: AsyncSession, catalog: str, name: str):
    """
    Add a named option. Leading/trailing whitespace is dropped.

    Raises:
        UnknownCatalogError, ValueError (blank name), DuplicateOptionError
    """
    model = catalog_model(catalog)
    name = name.strip()
    if not name:
        raise ValueError("Option name must not be blank")

    result = await db.execute(queries.select_option_by_name(model, name))
    if result.scalar_one_or_none() is not None:
        raise DuplicateOptionError(f"'{name}' already exists in {catalog}")

    option = model(name=name)
    db.add(option)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise DuplicateOptionError(f"'{name}' already exists in {catalog}") from exc
    await commit_or_raise(db)
    await db.refresh(option)

    logger.info("Added %s option %r (id=%s)", catalog, name, option.id)
    return option


async def delete_option(db: AsyncSession, catalog: str, option_id: int) -> None:
    """Remove an option. Assets and loans that use the name keep it."""
    model = catalog_model(catalog)
    result = await db.execute(queries.select_option_by_id(model, option_id))
    option = result.scalar_one_or_none()
    if option is None:
        raise OptionNotFoundError(f"Option {option_id} not found in {catalog}")

    await db.delete(option)
    await commit_or_raise(db)
    logger.info("Removed %s option %r (id=%s)", catalog, option.name, option_id)


async def ensure_names_in_catalogs(db: AsyncSession, values: dict[str, str | None]) -> None:
    """
    Check that each non-empty value exists in its catalog.

    `values` maps catalog name -> submitted value.
    """
    for catalog, value in values.items():
        if not value:
            continue
        model = catalog_model(catalog)
        result = await db.execute(queries.select_option_by_name(model, value))
        if result.scalar_one_or_none() is None:
            raise UnknownCatalogNameError(f"'{value}' is not listed in {catalog}")
