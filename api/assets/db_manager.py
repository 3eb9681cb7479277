# api/assets/db_manager.py
"""
Business logic for the asset registry.
"""
import logging

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.store import commit_or_raise, fetch_all
from db_models.asset import Asset
from db_models.borrow_record import BorrowRecord
from api.catalogs.db_manager import ensure_names_in_catalogs
from . import queries

logger = logging.getLogger(__name__)


class AssetNotFoundError(Exception):
    """Raised when asset doesn't exist."""
    pass


class AssetOnLoanError(Exception):
    """Raised when deleting an asset that is still out on loan."""
    pass


def _catalog_values(data: dict) -> dict:
    return {
        "brands": data.get("brand"),
        "models": data.get("model"),
        "vendors": data.get("vendor"),
        "departments": data.get("department"),
        "branches": data.get("branch"),
        "locations": data.get("location"),
    }


async def get_asset_or_raise(db: AsyncSession, asset_id: int) -> Asset:
    result = await db.execute(queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return asset


async def list_assets(db: AsyncSession, q: str | None = None) -> list[Asset]:
    """All assets, or a search by tag/code/name/serial when `q` is given."""
    stmt = queries.search_assets_query(q) if q else queries.select_all_assets()
    return await fetch_all(db, stmt, what="assets")


async def create_asset(db: AsyncSession, data: dict) -> Asset:
    """
    Register a new asset.

    Raises:
        UnknownCatalogNameError: catalog validation is on and a name is unknown
        StoreWriteError: the store rejected the insert
    """
    if settings.VALIDATE_CATALOG_NAMES:
        await ensure_names_in_catalogs(db, _catalog_values(data))

    asset = Asset(**data)
    db.add(asset)
    await commit_or_raise(db)
    await db.refresh(asset)

    logger.info("Registered asset %s (id=%s)", asset.asset_id, asset.id)
    return asset


async def update_asset(db: AsyncSession, asset_id: int, changes: dict) -> Asset:
    asset = await get_asset_or_raise(db, asset_id)

    if settings.VALIDATE_CATALOG_NAMES:
        await ensure_names_in_catalogs(db, _catalog_values(changes))

    for field, value in changes.items():
        if field in ("asset_id", "name") and value is None:
            value = ""
        setattr(asset, field, value)
    await commit_or_raise(db)
    await db.refresh(asset)
    return asset


async def delete_asset(db: AsyncSession, asset_id: int) -> None:
    """
    Delete an asset. Refused while it has an open loan; returned loans keep
    their history with the asset reference cleared.
    """
    asset = await get_asset_or_raise(db, asset_id)

    result = await db.execute(queries.count_open_loans_for_asset(asset_id))
    if (result.scalar() or 0) > 0:
        raise AssetOnLoanError(
            f"Asset {asset.asset_id or asset_id} is on loan; mark it returned before deleting"
        )

    await db.execute(
        update(BorrowRecord)
        .where(BorrowRecord.asset_id == asset_id)
        .values(asset_id=None)
    )
    await db.delete(asset)
    await commit_or_raise(db)

    logger.info("Deleted asset %s (id=%s)", asset.asset_id, asset_id)
