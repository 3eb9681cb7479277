# api/assets/queries.py
"""
SQLAlchemy query builders for the asset registry.
"""
from sqlalchemy import select, or_, func

from db_models.asset import Asset
from db_models.borrow_record import BorrowRecord


def select_all_assets():
    """All assets ordered by equipment tag."""
    return select(Asset).order_by(Asset.asset_id.asc(), Asset.id.asc())


def select_asset_by_id(asset_id: int):
    return select(Asset).where(Asset.id == asset_id)


def search_assets_query(text: str, limit: int = 50):
    """
    Case-insensitive partial match on tag, machine code, name or serial.
    `%` and `_` in the text match literally.
    """
    escaped = text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return (
        select(Asset)
        .where(
            or_(
                func.lower(Asset.asset_id).like(pattern, escape="\\"),
                func.lower(Asset.id_code).like(pattern, escape="\\"),
                func.lower(Asset.name).like(pattern, escape="\\"),
                func.lower(Asset.serial).like(pattern, escape="\\"),
            )
        )
        .order_by(Asset.asset_id.asc(), Asset.id.asc())
        .limit(limit)
    )


def count_open_loans_for_asset(asset_id: int):
    return (
        select(func.count(BorrowRecord.id))
        .where(
            BorrowRecord.asset_id == asset_id,
            BorrowRecord.returned == False,
        )
    )
