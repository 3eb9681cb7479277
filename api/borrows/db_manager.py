# api/borrows/db_manager.py
"""
Business logic for the borrow ledger: create, return, edit.
"""
import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.availability import active_loan_asset_ids
from core.lifecycle import (
    DuplicateBorrowError,
    apply_edit,
    apply_return,
    validate_new_borrow,
)
from core.store import StoreWriteError, backend_message, commit_or_raise, fetch_all
from db_models.borrow_record import BorrowRecord
from api.assets.db_manager import get_asset_or_raise
from api.catalogs.db_manager import ensure_names_in_catalogs
from . import queries

logger = logging.getLogger(__name__)

OPEN_LOAN_INDEX = "uq_borrows_open_asset"


class BorrowNotFoundError(Exception):
    pass


def _is_open_loan_conflict(exc: IntegrityError) -> bool:
    message = backend_message(exc)
    return OPEN_LOAN_INDEX in message or "borrows.asset_id" in message


async def get_borrow_or_raise(db: AsyncSession, borrow_id: int) -> BorrowRecord:
    result = await db.execute(queries.select_borrow_by_id(borrow_id))
    record = result.scalar_one_or_none()
    if record is None:
        raise BorrowNotFoundError(f"Borrow record {borrow_id} not found")
    return record


async def list_borrows(db: AsyncSession, returned: bool | None = None) -> list[BorrowRecord]:
    if returned is None:
        stmt = queries.select_all_borrows()
    else:
        stmt = queries.select_borrows_by_returned(returned)
    return await fetch_all(db, stmt, what="borrows")


async def get_active_asset_ids(db: AsyncSession) -> set:
    """Current availability-guard set, from a fresh read of open loans."""
    records = await fetch_all(db, queries.select_open_borrows(), what="borrows")
    return active_loan_asset_ids(records)


async def create_borrow(
    db: AsyncSession,
    data: dict,
    *,
    today: date,
    branch_tracking: bool | None = None,
    lender_default: str | None = None,
) -> BorrowRecord:
    """
    Record a new loan.

    A new loan always starts on loan; an end_date given here is the planned
    return date and only has to respect date order. Closing it goes through
    mark_returned or an edit.
    A blank lender_name falls back to `lender_default` (the signed-in user).

    Raises:
        BorrowValidationError (incl. DuplicateBorrowError): nothing is written
        AssetNotFoundError: asset_id does not exist
        StoreWriteError: the store rejected the insert
    """
    if branch_tracking is None:
        branch_tracking = settings.BRANCH_TRACKING

    start_date = data.get("start_date") or today
    end_date = data.get("end_date")
    asset_id = data.get("asset_id")

    active = await get_active_asset_ids(db)
    try:
        validate_new_borrow(
            asset_id=asset_id,
            borrower_dept=data.get("borrower_dept"),
            borrower_branch=data.get("borrower_branch"),
            start_date=start_date,
            end_date=end_date,
            active=active,
            branch_tracking=branch_tracking,
        )
    except DuplicateBorrowError:
        logger.warning("Rejected duplicate borrow for asset id=%s", asset_id)
        raise

    await get_asset_or_raise(db, asset_id)

    if settings.VALIDATE_CATALOG_NAMES:
        await ensure_names_in_catalogs(db, {
            "departments": data.get("borrower_dept"),
            "branches": data.get("borrower_branch"),
        })

    record = BorrowRecord(
        asset_id=asset_id,
        borrower_name=data.get("borrower_name"),
        borrower_dept=data.get("borrower_dept"),
        borrower_branch=data.get("borrower_branch"),
        lender_name=(data.get("lender_name") or "").strip() or lender_default,
        peripherals=data.get("peripherals"),
        start_date=start_date,
        end_date=end_date,
        returned=False,
        borrower_signature=data.get("borrower_signature") or None,
    )
    db.add(record)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        if _is_open_loan_conflict(exc):
            # Another session opened a loan after our availability read
            logger.warning("Open-loan index rejected borrow for asset id=%s", asset_id)
            raise DuplicateBorrowError(
                f"Asset {asset_id} is still on loan and cannot be borrowed again"
            ) from exc
        raise StoreWriteError(backend_message(exc)) from exc
    await commit_or_raise(db)
    await db.refresh(record)

    logger.info("Asset id=%s lent to %s (borrow id=%s)", asset_id, record.borrower_dept, record.id)
    return record


async def mark_returned(db: AsyncSession, borrow_id: int, *, today: date) -> BorrowRecord:
    """
    Close an open loan: returned = True, end_date = today.

    Raises:
        BorrowNotFoundError, AlreadyReturnedError
    """
    record = await get_borrow_or_raise(db, borrow_id)
    apply_return(record, today)
    await commit_or_raise(db)
    await db.refresh(record)

    logger.info("Borrow id=%s returned on %s", borrow_id, today.isoformat())
    return record


async def update_borrow(db: AsyncSession, borrow_id: int, changes: dict) -> BorrowRecord:
    """
    Apply a manual edit. Date order is checked against the merged values
    before anything is written.

    Raises:
        BorrowNotFoundError, BorrowValidationError, ReopenLoanError
    """
    record = await get_borrow_or_raise(db, borrow_id)

    if settings.VALIDATE_CATALOG_NAMES:
        await ensure_names_in_catalogs(db, {
            "departments": changes.get("borrower_dept"),
            "branches": changes.get("borrower_branch"),
        })

    apply_edit(record, changes)
    await commit_or_raise(db)
    await db.refresh(record)
    return record
